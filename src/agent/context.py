# src/agent/context.py
"""
AgentContext: the explicit bundle of collaborators every command and
handler works against.

There are no module-level singletons; the shell builds one context per run
and passes it down. Runtime-wide operations that commands trigger (reload,
quit, AI chat on/off) live here so commands stay thin.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Optional

from rich.console import Console

from bot_core.anti_afk import AntiAfk
from bot_core.give import ItemGiver
from bot_core.inventory import InventoryService
from bot_core.movement import MovementSupervisor
from chat.router import ChatCommandRouter
from chat.throttle import ChatThrottle
from commands.custom import CustomCommandTable
from commands.loader import load_builtin_commands
from commands.registry import CommandRegistry
from llm_stack.backend import create_chat_backend
from llm_stack.config import LLMConfig
from llm_stack.intents import IntentClassifier
from monitoring.bus import EventBus
from spec.commands import DispatchResult
from spec.llm import ChatBackend
from spec.world import WorldClient
from .config import ConfigManager
from .scheduler import Scheduler


log = logging.getLogger(__name__)


@dataclass
class AgentContext:
    config: ConfigManager
    world: WorldClient
    scheduler: Scheduler
    bus: EventBus
    registry: CommandRegistry
    custom: CustomCommandTable
    inventory: InventoryService
    movement: MovementSupervisor
    giver: ItemGiver
    router: ChatCommandRouter
    anti_afk: AntiAfk
    backend: Optional[ChatBackend] = None
    console: Console = field(default_factory=Console)
    stopping: asyncio.Event = field(default_factory=asyncio.Event)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        config: ConfigManager,
        world: WorldClient,
        *,
        scheduler: Optional[Scheduler] = None,
        bus: Optional[EventBus] = None,
        backend: Optional[ChatBackend] = None,
        console: Optional[Console] = None,
        load_commands: bool = True,
    ) -> "AgentContext":
        """
        Wire every component from the configuration document.

        When `backend` is None one is built from `ai_chat`; a backend that
        cannot be built (e.g. missing local model) leaves AI chat off.
        """
        scheduler = scheduler or Scheduler()
        bus = bus or EventBus()

        registry = CommandRegistry(bus=bus)
        inventory = InventoryService(world)
        movement = MovementSupervisor(world, scheduler, config.movement(), bus=bus)
        giver = ItemGiver(world, inventory, movement, bus=bus)

        if backend is None:
            try:
                backend = create_chat_backend(LLMConfig.from_dict(config.section("ai_chat")))
            except (ValueError, FileNotFoundError, ImportError) as exc:
                log.warning("Language backend unavailable, AI chat disabled: %s", exc)
                backend = None

        intents = IntentClassifier(backend) if backend is not None else None
        throttle = ChatThrottle(scheduler, config.chat().cooldown_s)
        router = ChatCommandRouter(
            world,
            intents,
            movement,
            inventory,
            giver,
            throttle,
            config=config.chat(),
            bus=bus,
        )

        ctx = cls(
            config=config,
            world=world,
            scheduler=scheduler,
            bus=bus,
            registry=registry,
            custom=CustomCommandTable(config, registry),
            inventory=inventory,
            movement=movement,
            giver=giver,
            router=router,
            anti_afk=AntiAfk(world, scheduler),
            backend=backend,
            console=console or Console(),
        )
        router.set_command_dispatcher(ctx.dispatch_from_chat)
        if load_commands:
            ctx.reload_commands(fresh=True)
        return ctx

    # ------------------------------------------------------------------
    # Command entry points
    # ------------------------------------------------------------------

    async def dispatch(self, line: str, *, sender: Optional[str] = None) -> DispatchResult:
        return await self.registry.dispatch(line, self, sender=sender)

    async def dispatch_from_chat(self, line: str, sender: str) -> DispatchResult:
        result = await self.dispatch(line, sender=sender)
        if result.status == "unhandled":
            reply = self.custom.get(line.split()[0]) or self.custom.get(line)
            if reply is not None:
                self.world.chat(reply)
            else:
                self.world.chat(f"Unknown command, {sender}.")
        return result

    # ------------------------------------------------------------------
    # Runtime-wide operations
    # ------------------------------------------------------------------

    def reload_commands(self, *, fresh: bool = False) -> int:
        return self.registry.bulk_reload(load_builtin_commands(reload=not fresh))

    def reload_config(self) -> None:
        """Re-read the config file and re-apply runtime settings."""
        self.config.reload()
        self.apply_settings()

    def apply_settings(self) -> None:
        self.movement.configure(self.config.movement())
        self.router.configure(self.config.chat())
        api_key = self.config.get("ai_chat.api_key") or ""
        if api_key and hasattr(self.backend, "set_api_key"):
            self.backend.set_api_key(api_key)
        log.debug("Runtime settings applied")

    def enable_ai_chat(self, api_key: Optional[str] = None) -> bool:
        """
        Turn AI chat on, persisting the key when one is given.

        Returns False when no backend is available or no key is known for
        a backend that needs one.
        """
        if self.backend is None or self.router.intents is None:
            log.warning("Cannot enable AI chat: no language backend configured")
            return False

        key = api_key or self.config.get("ai_chat.api_key") or ""
        needs_key = hasattr(self.backend, "set_api_key")
        if needs_key and not key:
            return False
        if needs_key:
            self.backend.set_api_key(key)

        self.config.update({"ai_chat": {"enabled": True, "api_key": key}})
        self.router.enabled = True
        self.router.throttle.reset_cooldown()
        log.info("AI chat responses enabled")
        return True

    def disable_ai_chat(self) -> None:
        if not self.router.enabled:
            log.info("AI chat was not active")
        self.router.enabled = False
        self.config.update({"ai_chat": {"enabled": False}})
        log.info("AI chat responses disabled")

    def request_quit(self) -> None:
        log.info("Shutting down...")
        self.stopping.set()
