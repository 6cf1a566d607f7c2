# src/bot_core/anti_afk.py
"""
Anti-AFK: a periodic small random action so the server does not kick the
agent for inactivity.

One AntiAfk per agent. start() replaces any running schedule; stop() reports
whether one was running. Each tick performs one of:

    jump        hold jump for 0.5 s
    sneak       hold sneak for 1 s
    look        turn to a random yaw/pitch
    swing       swing the arm
    small_move  hold forward/back/left/right for 0.5 s
"""

from __future__ import annotations

import logging
import math
import random
from typing import Callable, Dict, Optional

from agent.scheduler import Scheduler, TaskHandle
from spec.world import WorldClient


log = logging.getLogger(__name__)

DEFAULT_INTERVAL_S = 30.0

DIRECTIONS = ("forward", "back", "left", "right")


class AntiAfk:
    def __init__(
        self,
        world: WorldClient,
        scheduler: Scheduler,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._world = world
        self._scheduler = scheduler
        self._rng = rng or random.Random()
        self._handle: Optional[TaskHandle] = None
        self._interval_s: Optional[float] = None
        self._actions: Dict[str, Callable[[], object]] = {
            "jump": self._jump,
            "sneak": self._sneak,
            "look": self._look_around,
            "swing": self._swing_arm,
            "small_move": self._small_move,
        }

    @property
    def active(self) -> bool:
        return self._handle is not None and self._handle.active

    @property
    def interval_s(self) -> Optional[float]:
        return self._interval_s if self.active else None

    def start(self, interval_s: float = DEFAULT_INTERVAL_S) -> None:
        if interval_s <= 0:
            raise ValueError(f"interval_s must be positive, got {interval_s!r}")
        self._cancel()
        self._handle = self._scheduler.call_every(interval_s, self.perform, name="anti-afk")
        self._interval_s = interval_s
        log.info("Anti-AFK mode enabled (interval: %g seconds)", interval_s)

    def stop(self) -> bool:
        """Stop the schedule. Returns False when nothing was running."""
        was_active = self.active
        self._cancel()
        if was_active:
            log.info("Anti-AFK mode disabled")
        else:
            log.info("Anti-AFK mode was not active")
        return was_active

    async def perform(self, action: Optional[str] = None) -> str:
        """Run one action (random when not named) and return its name."""
        name = action or self._rng.choice(list(self._actions))
        result = self._actions[name]()
        if result is not None:
            await result
        log.debug("Anti-AFK: %s", name)
        return name

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _press(self, control: str, hold_s: float) -> None:
        self._world.set_control_state(control, True)
        self._scheduler.call_later(
            hold_s,
            lambda: self._world.set_control_state(control, False),
            name=f"anti-afk-release-{control}",
        )

    def _jump(self) -> None:
        self._press("jump", 0.5)

    def _sneak(self) -> None:
        self._press("sneak", 1.0)

    def _look_around(self):
        yaw = self._rng.random() * math.pi * 2
        pitch = self._rng.random() * math.pi - math.pi / 2
        return self._world.look(yaw, pitch)

    def _swing_arm(self) -> None:
        self._world.swing_arm()

    def _small_move(self) -> None:
        self._press(self._rng.choice(DIRECTIONS), 0.5)

    def _cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._interval_s = None
