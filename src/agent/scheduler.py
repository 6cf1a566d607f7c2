# src/agent/scheduler.py
"""
Cooperative task scheduling for the agent runtime.

Every timer in the agent (chat cooldown expiry, follow liveness checks,
background chat handling) is registered here and gets back a TaskHandle
that can be cancelled. Everything runs on the single asyncio event loop;
callbacks never run in parallel with each other.

Usage:

    scheduler = Scheduler()
    handle = scheduler.call_every(0.8, supervisor_check)
    ...
    handle.cancel()
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Optional, Set

log = logging.getLogger(__name__)

Callback = Callable[[], Any]


class TaskHandle:
    """
    Cancellation handle for a scheduled callback or spawned coroutine.

    Wraps either an asyncio.TimerHandle (one-shot timers) or an
    asyncio.Task (periodic loops, spawned coroutines).
    """

    def __init__(
        self,
        name: str,
        *,
        task: Optional[asyncio.Task] = None,
        timer: Optional[asyncio.TimerHandle] = None,
        on_done: Optional[Callable[["TaskHandle"], None]] = None,
    ) -> None:
        self.name = name
        self._task = task
        self._timer = timer
        self._cancelled = False
        self._fired = False
        self._on_done = on_done

    @property
    def active(self) -> bool:
        if self._cancelled or self._fired:
            return False
        if self._task is not None:
            return not self._task.done()
        return True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Cancel the registration. Safe to call more than once."""
        if self._cancelled:
            return
        self._cancelled = True
        if self._timer is not None:
            self._timer.cancel()
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._finish()

    async def wait(self) -> Any:
        """Await a spawned coroutine's result. Returns None for timers."""
        if self._task is None:
            return None
        try:
            return await self._task
        except asyncio.CancelledError:
            return None

    def _mark_fired(self) -> None:
        self._fired = True
        self._finish()

    def _finish(self) -> None:
        if self._on_done is not None:
            callback, self._on_done = self._on_done, None
            callback(self)


class Scheduler:
    """
    Registry of timers and background tasks on the running event loop.

    - call_later(delay_s, fn): one-shot timer
    - call_every(period_s, fn): periodic callback, first run after one period
    - spawn(coro): run a coroutine in the background

    Callbacks may be plain functions or coroutine functions. Exceptions
    raised by a periodic callback are logged and the loop keeps going; the
    callback can cancel its own handle to stop.
    """

    def __init__(self) -> None:
        self._handles: Set[TaskHandle] = set()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def call_later(self, delay_s: float, fn: Callback, *, name: str = "timer") -> TaskHandle:
        loop = asyncio.get_running_loop()
        handle = TaskHandle(name, on_done=self._forget)

        def _fire() -> None:
            handle._mark_fired()
            self._run_callback(fn, name)

        handle._timer = loop.call_later(max(0.0, delay_s), _fire)
        self._handles.add(handle)
        return handle

    def call_every(self, period_s: float, fn: Callback, *, name: str = "periodic") -> TaskHandle:
        if period_s <= 0:
            raise ValueError(f"period_s must be positive, got {period_s!r}")

        async def _loop() -> None:
            while True:
                await asyncio.sleep(period_s)
                try:
                    result = fn()
                    if inspect.isawaitable(result):
                        await result
                except asyncio.CancelledError:
                    raise
                except Exception:
                    log.exception("Periodic task %r raised", name)

        task = asyncio.get_running_loop().create_task(_loop())
        handle = TaskHandle(name, task=task, on_done=self._forget)
        self._handles.add(handle)
        return handle

    def spawn(self, coro: Awaitable[Any], *, name: str = "task") -> TaskHandle:
        task = asyncio.ensure_future(coro)
        handle = TaskHandle(name, task=task, on_done=self._forget)
        self._handles.add(handle)

        def _done(t: asyncio.Task) -> None:
            if not t.cancelled() and t.exception() is not None:
                log.error("Background task %r failed: %r", name, t.exception())
            handle._mark_fired()

        task.add_done_callback(_done)
        return handle

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def active_handles(self) -> Set[TaskHandle]:
        return {h for h in self._handles if h.active}

    def cancel_all(self) -> None:
        """Cancel every live registration (used at shutdown)."""
        for handle in list(self._handles):
            handle.cancel()
        self._handles.clear()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _forget(self, handle: TaskHandle) -> None:
        self._handles.discard(handle)

    def _run_callback(self, fn: Callback, name: str) -> None:
        try:
            result = fn()
        except Exception:
            log.exception("Timer %r raised", name)
            return
        if inspect.isawaitable(result):
            self.spawn(result, name=name)
