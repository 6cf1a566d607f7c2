# src/chat/router.py
"""
Chat command router: the entry point for inbound game chat.

Per message:
  1. ignore the agent's own messages
  2. chat-issued commands (prefix + allow-listed sender) go to the registry
  3. drop silently when AI chat is off, the cooldown is active, or the
     sender already has a request in flight
  4. classify, then run exactly one intent handler
  5. any unexpected failure -> log + generic apology to the sender
  6. the sender's pending marker is always released

Handlers reply through WorldClient.chat(). Movement and transfers are
delegated to MovementSupervisor and ItemGiver; this module only decides
what to do and what to say.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Awaitable, Callable, Dict, Optional

from agent.config import ChatConfig
from bot_core.give import ItemGiver
from bot_core.inventory import InventoryService
from bot_core.movement import MovementSupervisor
from llm_stack.errors import LLMServiceError
from monitoring.bus import EventBus
from monitoring.events import EventType
from monitoring.logger import log_event
from spec.llm import IntentModel
from spec.types import ActionResult, Intent
from spec.world import WorldClient
from .throttle import ChatThrottle


log = logging.getLogger(__name__)

MODULE = "chat.router"

ADVANCED_TRIGGER = "make fully advanced"

GREETINGS = (
    "Hello, {u}! How can I help you today?",
    "Hi there, {u}! What's up?",
    "Hey {u}! Nice to see you!",
    "Greetings, {u}! How are you doing?",
)

CommandDispatcher = Callable[[str, str], Awaitable[Any]]
IntentHandler = Callable[[str, str], Awaitable[None]]


class ChatCommandRouter:
    """
    Routes inbound chat to intent handlers.

    Public contract:
      await handle_chat(username, message) -> None   (never raises)
      enabled / configure(ChatConfig)
    """

    def __init__(
        self,
        world: WorldClient,
        intents: Optional[IntentModel],
        movement: MovementSupervisor,
        inventory: InventoryService,
        giver: ItemGiver,
        throttle: ChatThrottle,
        *,
        config: Optional[ChatConfig] = None,
        bus: Optional[EventBus] = None,
        dispatch_command: Optional[CommandDispatcher] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._world = world
        self.intents = intents
        self._movement = movement
        self._inventory = inventory
        self._giver = giver
        self._throttle = throttle
        self._bus = bus
        self._dispatch_command = dispatch_command
        self._rng = rng or random.Random()

        self.enabled = False
        self.show_chat = True
        self._prefix = "!"
        self._allowed_users: frozenset = frozenset()
        self.configure(config or ChatConfig())

        self._handlers: Dict[Intent, IntentHandler] = {
            Intent.FOLLOW: self._on_follow,
            Intent.GIVE_ITEM: self._on_give_item,
            Intent.GIVE_SPECIFIC_ITEM: self._on_give_specific_item,
            Intent.COME_HERE: self._on_come_here,
            Intent.STOP_FOLLOWING: self._on_stop_following,
            Intent.INVENTORY: self._on_inventory,
            Intent.GREETING: self._on_greeting,
            Intent.OTHER: self._on_other,
        }

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def configure(self, config: ChatConfig) -> None:
        self.enabled = config.ai_enabled
        self.show_chat = config.show_chat
        self._throttle.cooldown_s = config.cooldown_s
        self._prefix = config.command_prefix
        self._allowed_users = frozenset(u.lower() for u in config.allowed_users)

    def set_command_dispatcher(self, dispatcher: Optional[CommandDispatcher]) -> None:
        """Route prefixed chat from allow-listed users through `dispatcher`."""
        self._dispatch_command = dispatcher

    @property
    def throttle(self) -> ChatThrottle:
        return self._throttle

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    async def handle_chat(self, username: str, message: str) -> None:
        if username == self._world.username:
            return

        if self.show_chat:
            log.info("<%s> %s", username, message)

        if self._is_chat_command(username, message):
            await self._run_chat_command(username, message)
            return

        if not self.enabled or self.intents is None:
            return

        if not self._throttle.try_acquire(username):
            return

        try:
            log.debug('Processing message from %s: "%s"', username, message)
            log_event(
                self._bus, MODULE, EventType.CHAT_RECEIVED,
                f"Chat from {username}", {"text": message}, correlation_id=username,
            )

            intent = await self.intents.classify(message)
            log.debug("Detected intent: %s", intent.value)
            log_event(
                self._bus, MODULE, EventType.INTENT_CLASSIFIED,
                f"Intent {intent.value}", {"intent": intent.value, "text": message},
                correlation_id=username,
            )

            await self._handlers[intent](username, message)
        except Exception as exc:
            log.error("Failed to process message from %s: %s", username, exc)
            self._say(f"Sorry {username}, I had trouble understanding that.", username)
        finally:
            self._throttle.release(username)

    # ------------------------------------------------------------------
    # Chat-issued commands
    # ------------------------------------------------------------------

    def _is_chat_command(self, username: str, message: str) -> bool:
        if self._dispatch_command is None or not self._allowed_users or not self._prefix:
            return False
        return message.startswith(self._prefix) and username.lower() in self._allowed_users

    async def _run_chat_command(self, username: str, message: str) -> None:
        line = message[len(self._prefix):].strip()
        if not line:
            return
        try:
            await self._dispatch_command(line, username)
        except Exception as exc:
            log.error("Chat command from %s failed: %s", username, exc)
            self._say(f"Sorry {username}, that command failed.", username)

    # ------------------------------------------------------------------
    # Intent handlers
    # ------------------------------------------------------------------

    async def _on_follow(self, username: str, message: str) -> None:
        result = self._movement.follow(username)
        if result.success:
            self._say(f"I'm following you now, {username}!", username)
            log.info("Started following %s via AI command", username)
        elif result.error == "target_not_visible":
            self._say(f"I can't see you, {username}. Where are you?", username)
        else:
            self._say(f"Sorry, I couldn't follow you: {result.error}", username)

    async def _on_come_here(self, username: str, message: str) -> None:
        entity = self._world.find_player(username)
        if entity is None:
            self._say(f"I can't see you, {username}. Where are you?", username)
            return
        if self._world.pathfinder is None:
            log.warning("Pathfinder not available for come here command")
            self._say(f"I'll try to come to you, {username}!", username)
            return

        self._say(f"Coming to you, {username}!", username)
        result = await self._movement.move_near(entity)
        if result.success:
            log.info("Reached %s via AI command", username)
        else:
            log.warning("Could not reach %s: %s %s", username, result.error, result.details)

    async def _on_stop_following(self, username: str, message: str) -> None:
        self._movement.stop()
        self._say(f"I've stopped following, {username}.", username)

    async def _on_inventory(self, username: str, message: str) -> None:
        summary = self._inventory.describe()
        if not summary:
            self._say(f"My inventory is empty, {username}.", username)
            return
        self._say(f"My inventory: {summary}", username)
        log.info("Sent inventory to %s via AI command", username)

    async def _on_greeting(self, username: str, message: str) -> None:
        self._say(self._rng.choice(GREETINGS).format(u=username), username)

    async def _on_give_item(self, username: str, message: str) -> None:
        name = await self.intents.extract_item(message)
        if not name:
            self._say(f"What would you like me to give you, {username}?", username)
            return
        if self._inventory.best_match(name) is None:
            self._say(f"Sorry {username}, I don't have any {name}.", username)
            return

        result = await self._giver.give(username, name, 1)
        if result.success:
            self._say(f"Here's your {name}, {username}!", username)
            log.info("Gave %s to %s via AI command", name, username)
        else:
            self._report_give_failure(username, name, result)

    async def _on_give_specific_item(self, username: str, message: str) -> None:
        request = await self.intents.extract_item_details(message)
        if not request.found:
            self._say(f"What specific item would you like me to give you, {username}?", username)
            return

        name = request.name
        match = self._inventory.best_match(name)
        if match is None:
            self._say(f"Sorry {username}, I don't have any {name}.", username)
            return

        _, held = match
        actual = min(request.count, held)
        if actual < request.count:
            self._say(f"I only have {actual}x {name}, but I'll give you what I can.", username)

        result = await self._giver.give(username, name, request.count)
        if result.success:
            given = result.details.get("given", actual)
            self._say(f"Here's your {given}x {name}, {username}!", username)
            log.info("Gave %dx %s to %s via AI command", given, name, username)
        else:
            self._report_give_failure(username, name, result)

    async def _on_other(self, username: str, message: str) -> None:
        if ADVANCED_TRIGGER in message.lower():
            await self._on_advanced(username, message)
            return

        try:
            reply = await self.intents.generate_reply(username, message)
        except LLMServiceError as exc:
            log.error("AI API error: %s", exc)
            return
        self._say(reply, username)
        log.info("Sent AI response to %s", username)

    async def _on_advanced(self, username: str, message: str) -> None:
        log.info("Processing advanced command from %s", username)
        if self._movement.following is not None:
            await self._on_stop_following(username, message)

        name = await self.intents.extract_item(message)
        if name:
            await self._on_give_specific_item(username, message)
        else:
            self._say(f"I'm now in advanced mode, {username}. What would you like me to do?", username)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _report_give_failure(self, username: str, name: str, result: ActionResult) -> None:
        error = result.error
        if error == "recipient_not_visible":
            self._say(f"I can't see you, {username}. Where are you?", username)
        elif error == "item_unavailable":
            self._say(f"Sorry {username}, I don't have any {name}.", username)
        elif error in ("move_timeout", "too_far"):
            distance = result.details.get("distance")
            self._say(
                f"I couldn't get close enough to you, {username} ({distance} blocks away).",
                username,
            )
        else:
            self._say(f"Sorry, I couldn't give you that: {error}", username)

    def _say(self, text: str, username: Optional[str] = None) -> None:
        self._world.chat(text)
        log_event(
            self._bus, MODULE, EventType.CHAT_REPLY,
            text, {"to": username}, correlation_id=username,
        )
