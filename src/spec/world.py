# World collaborator interface definition
# src/spec/world.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Protocol, Union

from .types import EntityRef, HeldItem, Position


# ---------------------------------------------------------------------------
# Movement goals (what the core asks the pathfinding engine for)
# ---------------------------------------------------------------------------

@dataclass
class GoalNear:
    """Reach any point within `radius` blocks of `position`."""
    position: Position
    radius: float


@dataclass
class GoalFollow:
    """Keep within `distance` blocks of a moving entity."""
    entity: EntityRef
    distance: float


Goal = Union[GoalNear, GoalFollow]

ChatCallback = Callable[[str, str], None]


class Pathfinder(Protocol):
    """Goal-directed movement engine owned by the protocol client.

    The core never computes paths; it submits goals, cancels them and asks
    whether the engine is still moving.
    """

    @property
    def current_goal(self) -> Optional[Goal]:
        ...

    def set_goal(self, goal: Optional[Goal], dynamic: bool = False) -> None:
        """Submit a goal. `dynamic=True` keeps re-planning as the goal moves."""
        ...

    def stop(self) -> None:
        """Cancel the current goal and halt."""
        ...

    def is_moving(self) -> bool:
        ...


class WorldClient(Protocol):
    """Abstract interface for the game-world connection.

    This is the Mineflayer-adjacent "body":
    - entity/position lookup by player name
    - held-item enumeration
    - movement engine access
    - toss, look and chat primitives
    - raw controls (jump, sneak, walk) and arm swing
    """

    @property
    def username(self) -> str:
        """Name the agent is logged in as."""
        ...

    @property
    def position(self) -> Optional[Position]:
        """Current position of the agent, None before spawn."""
        ...

    @property
    def pathfinder(self) -> Optional[Pathfinder]:
        """Movement engine, None when the capability is not loaded."""
        ...

    def connect(self) -> None:
        ...

    def quit(self) -> None:
        ...

    def find_player(self, username: str) -> Optional[EntityRef]:
        """Return the live entity for a player, or None when not visible."""
        ...

    def held_items(self) -> List[HeldItem]:
        ...

    def toss(self, type_id: int, count: int) -> Awaitable[None]:
        """Drop `count` items of `type_id` in front of the agent."""
        ...

    def look_at(self, position: Position) -> Awaitable[None]:
        ...

    def look(self, yaw: float, pitch: float) -> Awaitable[None]:
        """Turn to an absolute yaw/pitch in radians."""
        ...

    def set_control_state(self, control: str, state: bool) -> None:
        """Press or release a movement control: forward, back, left, right, jump, sneak."""
        ...

    def swing_arm(self) -> None:
        ...
    def chat(self, message: str) -> None:
        ...

    def on_chat(self, callback: ChatCallback) -> None:
        """Register a callback invoked with (username, message) for public chat."""
        ...
