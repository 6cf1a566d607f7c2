# src/bot_core/give.py
"""
Item transfer: walk to a player, face them, toss items.

Shared by the chat router (give_item / give_specific_item intents) and the
`give` / `gimme` console commands.

Failure codes (ActionResult.error):
    recipient_not_visible   player has no known entity
    item_unavailable        nothing held matches the requested name
    pathfinder_unavailable  | move_timeout | too_far | position_unknown
                            could not get close enough (from MovementSupervisor)
    transfer_failed         look/toss raised
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from monitoring.bus import EventBus
from monitoring.events import EventType
from monitoring.logger import log_event
from spec.types import ActionResult
from spec.world import WorldClient
from .inventory import InventoryService
from .movement import MovementSupervisor


log = logging.getLogger(__name__)

MODULE = "bot_core.give"

HEAD_HEIGHT = 1.6


class ItemGiver:
    """Executes one give request end to end; never raises for expected failures."""

    def __init__(
        self,
        world: WorldClient,
        inventory: InventoryService,
        movement: MovementSupervisor,
        *,
        bus: Optional[EventBus] = None,
        settle_delay_s: float = 0.5,
    ) -> None:
        self._world = world
        self._inventory = inventory
        self._movement = movement
        self._bus = bus
        self._settle_delay_s = settle_delay_s

    async def give(self, username: str, item_name: str, count: int = 1) -> ActionResult:
        requested = max(1, int(count))
        base_details = {"recipient": username, "item": item_name, "requested": requested}

        entity = self._world.find_player(username)
        if entity is None:
            log.warning("Cannot give items: player %s not found or not in range", username)
            return ActionResult(False, "recipient_not_visible", base_details)

        match = self._inventory.best_match(item_name)
        if match is None:
            log.warning("Cannot give items: %s not found in inventory", item_name)
            return ActionResult(False, "item_unavailable", base_details)

        stack, held = match
        actual = min(requested, held)
        details = dict(base_details, held_name=stack.name, held=held, given=actual)

        log.info("Moving to %s to give %d %s...", username, actual, stack.name)
        moved = await self._movement.move_near(entity)
        if not moved.success:
            log.warning(
                "Could not get close enough to %s (distance: %s blocks)",
                username,
                moved.details.get("distance"),
            )
            return ActionResult(False, moved.error, dict(details, **moved.details, given=0))

        try:
            await self._world.look_at(entity.position.offset(0, HEAD_HEIGHT, 0))
            await asyncio.sleep(self._settle_delay_s)
            await self._world.toss(stack.type_id, actual)
        except Exception as exc:
            log.error("Failed to give item: %s", exc)
            return ActionResult(False, "transfer_failed", dict(details, given=0, reason=repr(exc)))

        log.info("Gave %d %s to %s", actual, stack.name, username)
        log_event(
            self._bus,
            MODULE,
            EventType.ITEM_GIVEN,
            f"Gave {actual}x {stack.name} to {username}",
            details,
            correlation_id=username,
        )
        return ActionResult(True, None, dict(details, shortfall=actual < requested))
