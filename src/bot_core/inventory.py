# src/bot_core/inventory.py
"""
Read-only queries over the agent's held items.

Nothing here mutates the inventory; transfers go through bot_core.give.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Dict, List, Optional, Tuple, Union

from spec.types import HeldItem
from spec.world import WorldClient


log = logging.getLogger(__name__)

INVENTORY_SLOTS = 36


class InventoryService:
    """Name / id lookups, counts and capacity checks on WorldClient.held_items()."""

    def __init__(self, world: WorldClient) -> None:
        self._world = world

    def items(self) -> List[HeldItem]:
        return list(self._world.held_items())

    def find_items(
        self,
        name_or_id: Union[str, int],
        *,
        partial: bool = False,
        ignore_case: bool = True,
    ) -> List[HeldItem]:
        """
        Stacks matching an item name or numeric type id.

        With `partial=True` a stack matches when the query is a substring
        of its name ("log" matches "oak_log").
        """
        if isinstance(name_or_id, int) and not isinstance(name_or_id, bool):
            return [i for i in self.items() if i.type_id == name_or_id]

        query = str(name_or_id)
        if ignore_case:
            query = query.lower()

        matches: List[HeldItem] = []
        for item in self.items():
            name = item.name.lower() if ignore_case else item.name
            if (query in name) if partial else (name == query):
                matches.append(item)
        return matches

    def count_items(self, name: str, *, partial: bool = False) -> int:
        return sum(i.count for i in self.find_items(name, partial=partial))

    def best_match(self, name: str) -> Optional[Tuple[HeldItem, int]]:
        """
        First stack partially matching `name`, plus the total held under that
        stack's exact name. None when nothing matches.
        """
        matches = self.find_items(name, partial=True)
        if not matches:
            return None
        stack = matches[0]
        return stack, self.count_items(stack.name)

    def free_slot_count(self) -> int:
        return max(0, INVENTORY_SLOTS - len(self.items()))

    def has_free_slots(self, required: int = 1) -> bool:
        return self.free_slot_count() >= required

    def totals(self) -> Dict[str, int]:
        """Item name -> total count, in first-seen order."""
        counts: Dict[str, int] = OrderedDict()
        for item in self.items():
            counts[item.name] = counts.get(item.name, 0) + item.count
        return counts

    def describe(self) -> str:
        """'3x log, 1x iron_sword' or '' when nothing is held."""
        return ", ".join(f"{count}x {name}" for name, count in self.totals().items())
