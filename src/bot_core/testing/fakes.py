# src/bot_core/testing/fakes.py
"""
Test helpers for bot_core.

Provides:
- FakePathfinder: records submitted goals; can "arrive" instantly.
- FakeWorld: in-memory WorldClient with players, held items and chat.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from spec.types import EntityRef, HeldItem, Position
from spec.world import ChatCallback, Goal, GoalNear


@dataclass
class SubmittedGoal:
    """Record of a goal passed to FakePathfinder.set_goal()."""

    goal: Optional[Goal]
    dynamic: bool


class FakePathfinder:
    """
    In-memory Pathfinder.

    - arrive=True: a GoalNear teleports the owning world onto the goal and
      the engine reports not moving.
    - arrive=False: the engine keeps "moving" forever (for timeout tests)
      unless `moving` is flipped by the test.
    """

    def __init__(self, world: Optional["FakeWorld"] = None, *, arrive: bool = True) -> None:
        self.world = world
        self.arrive = arrive
        self.moving = False
        self.goals: List[SubmittedGoal] = []
        self.stop_calls = 0
        self._goal: Optional[Goal] = None

    @property
    def current_goal(self) -> Optional[Goal]:
        return self._goal

    def set_goal(self, goal: Optional[Goal], dynamic: bool = False) -> None:
        self.goals.append(SubmittedGoal(goal, dynamic))
        self._goal = goal
        if isinstance(goal, GoalNear) and self.arrive and self.world is not None:
            self.world.position = goal.position
            self.moving = False
        else:
            self.moving = goal is not None

    def stop(self) -> None:
        self.stop_calls += 1
        self._goal = None
        self.moving = False

    def is_moving(self) -> bool:
        return self.moving


class FakeWorld:
    """
    In-memory WorldClient used for unit and integration tests.

    - add_player()/remove_player()/respawn() drive entity visibility.
    - tossed / looked_at / looked / control_log / swings / sent_chat record
      every outbound action.
    - emit_chat() delivers a chat line to registered callbacks.
    """

    def __init__(
        self,
        username: str = "Humini",
        *,
        position: Optional[Position] = Position(0.0, 64.0, 0.0),
        items: Optional[List[HeldItem]] = None,
        with_pathfinder: bool = True,
        arrive: bool = True,
    ) -> None:
        self._username = username
        self.position: Optional[Position] = position
        self.players: Dict[str, EntityRef] = {}
        self.items: List[HeldItem] = list(items or [])
        self.pathfinder: Optional[FakePathfinder] = (
            FakePathfinder(self, arrive=arrive) if with_pathfinder else None
        )
        self.tossed: List[Tuple[int, int]] = []
        self.looked_at: List[Position] = []
        self.looked: List[Tuple[float, float]] = []
        self.controls: Dict[str, bool] = {}
        self.control_log: List[Tuple[str, bool]] = []
        self.swings = 0
        self.sent_chat: List[str] = []
        self.connected = False
        self.toss_error: Optional[BaseException] = None
        self._chat_callbacks: List[ChatCallback] = []
        self._next_entity_id = 100

    # ------------------------------------------------------------------
    # Test controls
    # ------------------------------------------------------------------

    def add_player(self, username: str, position: Position = Position(5.0, 64.0, 5.0)) -> EntityRef:
        self._next_entity_id += 1
        entity = EntityRef(self._next_entity_id, username, position)
        self.players[username] = entity
        return entity

    def remove_player(self, username: str) -> None:
        self.players.pop(username, None)

    def respawn(self, username: str) -> EntityRef:
        """Replace a player's entity object (same player, new identity)."""
        old = self.players[username]
        return self.add_player(username, old.position)

    def emit_chat(self, username: str, message: str) -> None:
        for callback in list(self._chat_callbacks):
            callback(username, message)

    # ------------------------------------------------------------------
    # WorldClient protocol
    # ------------------------------------------------------------------

    @property
    def username(self) -> str:
        return self._username

    def connect(self) -> None:
        self.connected = True

    def quit(self) -> None:
        self.connected = False

    def find_player(self, username: str) -> Optional[EntityRef]:
        return self.players.get(username)

    def held_items(self) -> List[HeldItem]:
        return list(self.items)

    async def toss(self, type_id: int, count: int) -> None:
        if self.toss_error is not None:
            raise self.toss_error
        self.tossed.append((type_id, count))

    async def look_at(self, position: Position) -> None:
        self.looked_at.append(position)

    async def look(self, yaw: float, pitch: float) -> None:
        self.looked.append((yaw, pitch))

    def set_control_state(self, control: str, state: bool) -> None:
        self.controls[control] = state
        self.control_log.append((control, state))

    def swing_arm(self) -> None:
        self.swings += 1

    def chat(self, message: str) -> None:
        self.sent_chat.append(message)

    def on_chat(self, callback: ChatCallback) -> None:
        self._chat_callbacks.append(callback)
