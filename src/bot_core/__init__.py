# bot_core package
# src/bot_core/__init__.py
"""
The agent's body: everything that touches the game world.

Exports:
    - InventoryService: read-only held-item queries
    - MovementSupervisor / FollowSession: goal submission and follow supervision
    - ItemGiver: walk-look-toss item transfer
    - AntiAfk: periodic idle actions against inactivity kicks
    - OfflineWorld / create_world_client: WorldClient construction
"""

from __future__ import annotations

from .anti_afk import AntiAfk
from .client import create_world_client
from .give import ItemGiver
from .inventory import INVENTORY_SLOTS, InventoryService
from .movement import FollowSession, MovementSupervisor
from .offline import OfflineWorld

__all__ = [
    "AntiAfk",
    "create_world_client",
    "ItemGiver",
    "INVENTORY_SLOTS",
    "InventoryService",
    "FollowSession",
    "MovementSupervisor",
    "OfflineWorld",
]
