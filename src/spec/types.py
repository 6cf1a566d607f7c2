# core shared types: positions, entities, held items, intents, action results
# src/spec/types.py

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# World primitives
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Position:
    """Point in world space (block units, float precision)."""
    x: float
    y: float
    z: float

    def distance_to(self, other: "Position") -> float:
        """Euclidean distance between two positions."""
        return math.sqrt(
            (self.x - other.x) ** 2
            + (self.y - other.y) ** 2
            + (self.z - other.z) ** 2
        )

    def offset(self, dx: float, dy: float, dz: float) -> "Position":
        return Position(self.x + dx, self.y + dy, self.z + dz)


@dataclass(eq=False)
class EntityRef:
    """Live entity handle as exposed by the world collaborator.

    Compared by identity: the protocol client may replace the object for the
    same player (respawn, chunk reload), and the movement supervisor relies on
    `is` to notice that churn.
    """
    entity_id: int
    username: str
    position: Position


@dataclass
class HeldItem:
    """One inventory stack held by the agent."""
    name: str                               # e.g. "oak_log"
    count: int                              # stack size (>= 1)
    type_id: int                            # numeric item type, used by toss
    slot: Optional[int] = None


# ---------------------------------------------------------------------------
# Intent routing
# ---------------------------------------------------------------------------

class Intent(str, Enum):
    """Fixed intent set the chat classifier maps every message onto."""

    FOLLOW = "follow"
    GIVE_ITEM = "give_item"
    GIVE_SPECIFIC_ITEM = "give_specific_item"
    COME_HERE = "come_here"
    STOP_FOLLOWING = "stop_following"
    INVENTORY = "inventory"
    GREETING = "greeting"
    OTHER = "other"


@dataclass
class ItemRequest:
    """Canonical item name (None when nothing was mentioned) plus a count >= 1."""
    name: Optional[str] = None
    count: int = 1

    def __post_init__(self) -> None:
        self.count = max(1, int(self.count))

    @property
    def found(self) -> bool:
        return bool(self.name)


# ---------------------------------------------------------------------------
# Action outcomes
# ---------------------------------------------------------------------------

@dataclass
class ActionResult:
    """Result of executing a movement or transfer action."""
    success: bool                           # did it work?
    error: Optional[str]                    # error code if not
    details: Dict[str, Any] = field(default_factory=dict)   # extra info (distance, counts)
