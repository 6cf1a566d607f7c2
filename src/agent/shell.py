# src/agent/shell.py
"""
AgentShell: the runtime that ties a WorldClient to the command surface.

Wiring (run()):
  - logging (agent.logging_config) and the optional JSONL event log
  - configuration (agent.config.ConfigManager)
  - WorldClient (bot_core.client.create_world_client, or injected)
  - AgentContext (registry, supervisor, router, language backend)
  - chat events -> ChatCommandRouter.handle_chat, one task per message
  - console lines -> CommandRegistry, then the custom table

Everything runs on one asyncio loop. The only other thread is the stdin
reader, which hands lines to the loop through a queue.
"""

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from pathlib import Path
from typing import Optional, TextIO

from bot_core.client import create_world_client
from monitoring.logger import JsonFileLogger
from spec.commands import DispatchResult
from spec.llm import ChatBackend
from spec.world import WorldClient
from .config import ConfigManager, load_config
from .context import AgentContext
from .logging_config import configure_logging, set_debug


log = logging.getLogger(__name__)

_EOF = object()


class AgentShell:
    def __init__(
        self,
        config_path: Path | str | None = None,
        *,
        offline: bool = False,
        debug: bool = False,
        world: Optional[WorldClient] = None,
        backend: Optional[ChatBackend] = None,
        stdin: Optional[TextIO] = None,
    ) -> None:
        self._config_path = config_path
        self._offline = offline
        self._debug = debug
        self._world = world
        self._backend = backend
        self._stdin = stdin if stdin is not None else sys.stdin
        self._event_log: Optional[JsonFileLogger] = None
        self.context: Optional[AgentContext] = None

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def build(self, config: Optional[ConfigManager] = None) -> AgentContext:
        """Load config and wire the context without starting any I/O."""
        config = config or load_config(self._config_path)

        configure_logging(config.get("logging.level", "INFO"))
        if self._debug:
            set_debug(True)

        world = self._world or create_world_client(config.section("bot"), offline=self._offline)
        ctx = AgentContext.create(config, world, backend=self._backend)

        event_log = config.get("logging.event_log")
        if event_log:
            self._event_log = JsonFileLogger(Path(event_log), ctx.bus)

        world.on_chat(self._on_chat)
        self.context = ctx
        return ctx

    def _on_chat(self, username: str, message: str) -> None:
        # called on the loop thread by the world client
        ctx = self.context
        if ctx is None:
            return
        ctx.scheduler.spawn(ctx.router.handle_chat(username, message), name=f"chat:{username}")

    # ------------------------------------------------------------------
    # Console
    # ------------------------------------------------------------------

    async def handle_console_line(self, line: str) -> Optional[DispatchResult]:
        """
        Dispatch one console line.

        Unresolved input falls back to the custom table: first the command
        token, then the whole line.
        """
        ctx = self.context
        line = line.strip()
        if ctx is None or not line:
            return None

        result = await ctx.dispatch(line)
        if result.status != "unhandled":
            return result

        trigger = line.split()[0]
        reply = ctx.custom.get(trigger)
        if reply is None:
            trigger, reply = line, ctx.custom.get(line)

        if reply is not None:
            ctx.world.chat(reply)
            log.info("Executed custom command: %s -> %s", trigger, reply)
        else:
            log.warning('Unknown command. Type "help" for available commands.')
        return result

    def _start_reader(self, loop: asyncio.AbstractEventLoop, queue: "asyncio.Queue[object]") -> None:
        def _read() -> None:
            try:
                for raw in iter(self._stdin.readline, ""):
                    loop.call_soon_threadsafe(queue.put_nowait, raw)
                loop.call_soon_threadsafe(queue.put_nowait, _EOF)
            except RuntimeError:
                # loop already closed: shutdown finished before stdin did
                return

        threading.Thread(target=_read, name="console-reader", daemon=True).start()

    async def _console_loop(self, queue: "asyncio.Queue[object]") -> None:
        ctx = self.context
        while not ctx.stopping.is_set():
            item = await queue.get()
            if item is _EOF:
                log.info("Console closed")
                ctx.request_quit()
                return
            await self.handle_console_line(str(item))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def run(self) -> int:
        ctx = self.context or self.build()
        ctx.world.connect()
        log.info('Console command handler initialized. Type "help" for available commands.')

        queue: "asyncio.Queue[object]" = asyncio.Queue()
        self._start_reader(asyncio.get_running_loop(), queue)
        console = asyncio.ensure_future(self._console_loop(queue))

        try:
            await ctx.stopping.wait()
        finally:
            console.cancel()
            await self.shutdown()
        return 0

    async def shutdown(self) -> None:
        ctx = self.context
        if ctx is None:
            return
        if ctx.movement.following is not None:
            ctx.movement.stop()
        if ctx.anti_afk.active:
            ctx.anti_afk.stop()
        ctx.scheduler.cancel_all()
        if ctx.backend is not None:
            await ctx.backend.close()
        ctx.world.quit()
        if self._event_log is not None:
            self._event_log.close()
            self._event_log = None
        log.info("Shutdown complete")
