# src/bot_core/offline.py
"""
OfflineWorld: WorldClient for console-only sessions.

Used when no game connection is available (`--offline`). Nobody is ever
visible, nothing is held, there is no movement engine, and outbound chat
goes to the log. Every console command still runs; world-dependent ones
report why they cannot act.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from spec.types import EntityRef, HeldItem, Position
from spec.world import ChatCallback, Pathfinder


log = logging.getLogger(__name__)


class OfflineWorld:
    def __init__(self, username: str = "Humini") -> None:
        self._username = username
        self._callbacks: List[ChatCallback] = []
        self.connected = False

    @property
    def username(self) -> str:
        return self._username

    @property
    def position(self) -> Optional[Position]:
        return None

    @property
    def pathfinder(self) -> Optional[Pathfinder]:
        return None

    def connect(self) -> None:
        self.connected = True
        log.info("Running offline as %s (no game connection)", self._username)

    def quit(self) -> None:
        self.connected = False

    def find_player(self, username: str) -> Optional[EntityRef]:
        return None

    def held_items(self) -> List[HeldItem]:
        return []

    async def toss(self, type_id: int, count: int) -> None:
        raise RuntimeError("offline: cannot toss items")

    async def look_at(self, position: Position) -> None:
        return None

    async def look(self, yaw: float, pitch: float) -> None:
        return None

    def set_control_state(self, control: str, state: bool) -> None:
        log.debug("offline: ignoring control %s=%s", control, state)

    def swing_arm(self) -> None:
        return None

    def chat(self, message: str) -> None:
        log.info("[chat] <%s> %s", self._username, message)

    def on_chat(self, callback: ChatCallback) -> None:
        self._callbacks.append(callback)
