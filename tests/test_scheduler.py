# tests/test_scheduler.py
"""
Tests for agent.scheduler

Covers:
- one-shot timers fire once and can be cancelled
- periodic callbacks keep running after an exception
- spawned coroutines and cancel_all()
"""

from __future__ import annotations

import asyncio
from typing import List

import pytest

from agent.scheduler import Scheduler


@pytest.mark.asyncio
async def test_call_later_fires_once() -> None:
    scheduler = Scheduler()
    fired: List[str] = []

    handle = scheduler.call_later(0.01, lambda: fired.append("x"))
    assert handle.active

    await asyncio.sleep(0.05)

    assert fired == ["x"]
    assert not handle.active
    assert scheduler.active_handles() == set()


@pytest.mark.asyncio
async def test_cancelled_timer_never_fires_and_cancel_is_idempotent() -> None:
    scheduler = Scheduler()
    fired: List[str] = []

    handle = scheduler.call_later(0.01, lambda: fired.append("x"))
    handle.cancel()
    handle.cancel()

    await asyncio.sleep(0.05)

    assert fired == []
    assert handle.cancelled


@pytest.mark.asyncio
async def test_call_every_survives_callback_errors() -> None:
    scheduler = Scheduler()
    ticks: List[int] = []

    def tick() -> None:
        ticks.append(len(ticks))
        if len(ticks) == 1:
            raise RuntimeError("first tick fails")

    handle = scheduler.call_every(0.01, tick)
    await asyncio.sleep(0.08)
    handle.cancel()
    seen = len(ticks)
    await asyncio.sleep(0.03)

    assert seen >= 2
    assert len(ticks) == seen


def test_call_every_rejects_non_positive_period() -> None:
    scheduler = Scheduler()
    with pytest.raises(ValueError):
        scheduler.call_every(0, lambda: None)


@pytest.mark.asyncio
async def test_spawn_and_wait_returns_result() -> None:
    scheduler = Scheduler()

    async def work() -> int:
        await asyncio.sleep(0)
        return 42

    handle = scheduler.spawn(work(), name="work")
    assert await handle.wait() == 42
    await asyncio.sleep(0)
    assert not handle.active


@pytest.mark.asyncio
async def test_cancel_all_stops_everything() -> None:
    scheduler = Scheduler()
    fired: List[str] = []

    scheduler.call_later(0.02, lambda: fired.append("timer"))
    scheduler.call_every(0.01, lambda: fired.append("tick"))
    scheduler.spawn(asyncio.sleep(10), name="sleeper")
    assert len(scheduler.active_handles()) == 3

    scheduler.cancel_all()
    await asyncio.sleep(0.05)

    assert fired == []
    assert scheduler.active_handles() == set()
