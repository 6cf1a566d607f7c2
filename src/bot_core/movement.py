# src/bot_core/movement.py
"""
Movement supervision on top of the external pathfinding engine.

The supervisor never computes paths. It submits goals to
WorldClient.pathfinder, cancels them, and watches progress:

    follow(username)       -> dynamic follow goal + periodic liveness check
    stop()                 -> cancel the follow session (idempotent)
    move_near(target)      -> one-shot approach, polled until close/idle/timeout

State:
    Idle --follow--> Following --check--> Following
    Following --stop | lost target | superseding follow | move_near--> Idle

Design constraints:
- At most one FollowSession per agent.
- Expected failures (engine missing, target not visible, timeout) come back
  as ActionResult error codes; nothing here raises for them.
- The periodic check is a Scheduler registration; tearing a session down
  cancels it.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Optional, Union

from agent.config import MovementConfig
from agent.scheduler import Scheduler, TaskHandle
from monitoring.bus import EventBus
from monitoring.events import EventType
from monitoring.logger import log_event
from spec.types import ActionResult, EntityRef, Position
from spec.world import GoalFollow, GoalNear, WorldClient


log = logging.getLogger(__name__)

MODULE = "bot_core.movement"

MoveTarget = Union[Position, EntityRef]


@dataclass
class FollowSession:
    """The single active follow, owned by MovementSupervisor."""

    target: str                      # player username
    distance: float
    check_interval_s: float
    handle: Optional[TaskHandle] = None
    started_at: float = field(default_factory=time.time)
    retargets: int = 0               # goal resubmissions after entity churn

    @property
    def active(self) -> bool:
        return self.handle is not None and self.handle.active


class MovementSupervisor:
    """
    Submits and supervises movement goals.

    Public contract:
      follow(username, distance=None) -> ActionResult
      stop() -> ActionResult
      await move_near(target, radius=None, timeout_s=None) -> ActionResult
    """

    def __init__(
        self,
        world: WorldClient,
        scheduler: Scheduler,
        config: MovementConfig | None = None,
        *,
        bus: EventBus | None = None,
    ) -> None:
        self._world = world
        self._scheduler = scheduler
        self._cfg = config if config is not None else MovementConfig()
        self._bus = bus
        self._session: Optional[FollowSession] = None

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def config(self) -> MovementConfig:
        return self._cfg

    def configure(self, config: MovementConfig) -> None:
        """Apply new tuning. An active session keeps its original period."""
        self._cfg = config

    @property
    def session(self) -> Optional[FollowSession]:
        return self._session

    @property
    def following(self) -> Optional[str]:
        return self._session.target if self._session is not None else None

    # ------------------------------------------------------------------
    # Follow
    # ------------------------------------------------------------------

    def follow(self, username: str, distance: float | None = None) -> ActionResult:
        pathfinder = self._world.pathfinder
        if pathfinder is None:
            log.error("Cannot follow: pathfinder capability not loaded")
            return ActionResult(
                success=False,
                error="pathfinder_unavailable",
                details={"target": username},
            )

        entity = self._world.find_player(username)
        if entity is None:
            log.warning("Cannot follow %s: player not found or not in range", username)
            return ActionResult(
                success=False,
                error="target_not_visible",
                details={"target": username},
            )

        if self._session is not None:
            log.info("Switching follow target from %s to %s", self._session.target, username)
            self._teardown()

        follow_distance = self._cfg.follow_distance if distance is None else float(distance)
        pathfinder.set_goal(GoalFollow(entity, follow_distance), dynamic=True)

        session = FollowSession(
            target=username,
            distance=follow_distance,
            check_interval_s=self._cfg.check_interval_s,
        )
        session.handle = self._scheduler.call_every(
            session.check_interval_s,
            self._check,
            name=f"follow:{username}",
        )
        self._session = session

        log.info("Now following %s", username)
        log_event(
            self._bus,
            MODULE,
            EventType.FOLLOW_STARTED,
            f"Following {username}",
            {"target": username, "distance": follow_distance},
            correlation_id=username,
        )
        return ActionResult(
            success=True,
            error=None,
            details={"target": username, "distance": follow_distance},
        )

    def stop(self) -> ActionResult:
        session = self._session
        was_active = session is not None
        self._teardown()

        pathfinder = self._world.pathfinder
        if pathfinder is not None:
            pathfinder.stop()

        if session is not None:
            log.info("Stopped following %s", session.target)
            log_event(
                self._bus,
                MODULE,
                EventType.FOLLOW_STOPPED,
                f"Stopped following {session.target}",
                {"target": session.target, "retargets": session.retargets},
                correlation_id=session.target,
            )
        else:
            log.info("Not currently following anyone")

        return ActionResult(
            success=True,
            error=None,
            details={
                "was_active": was_active,
                "target": session.target if session is not None else None,
            },
        )

    def _check(self) -> None:
        """Periodic follow check: drop on lost target, resubmit on entity churn."""
        session = self._session
        if session is None:
            return

        pathfinder = self._world.pathfinder
        entity = self._world.find_player(session.target)

        if entity is None or pathfinder is None:
            log.warning("Lost sight of %s; no longer following", session.target)
            self._teardown()
            if pathfinder is not None:
                pathfinder.stop()
            log_event(
                self._bus,
                MODULE,
                EventType.FOLLOW_LOST,
                f"Lost target {session.target}",
                {"target": session.target},
                correlation_id=session.target,
            )
            return

        goal = pathfinder.current_goal
        if isinstance(goal, GoalFollow) and goal.entity is entity:
            return

        session.retargets += 1
        log.debug("Follow target %s changed entity; resubmitting goal", session.target)
        pathfinder.set_goal(GoalFollow(entity, session.distance), dynamic=True)

    def _teardown(self) -> None:
        session, self._session = self._session, None
        if session is not None and session.handle is not None:
            session.handle.cancel()

    # ------------------------------------------------------------------
    # One-shot approach
    # ------------------------------------------------------------------

    async def move_near(
        self,
        target: MoveTarget,
        radius: float | None = None,
        timeout_s: float | None = None,
    ) -> ActionResult:
        """
        Walk to within `radius` of a position or a live entity.

        Polls every poll_interval_s until the agent is within
        radius + arrival_slack, the engine stops moving, or timeout_s
        elapses. Success depends only on the final distance.
        """
        pathfinder = self._world.pathfinder
        if pathfinder is None:
            log.error("Cannot move: pathfinder capability not loaded")
            return ActionResult(False, "pathfinder_unavailable", {})

        radius = self._cfg.approach_radius if radius is None else float(radius)
        timeout_s = self._cfg.move_timeout_s if timeout_s is None else float(timeout_s)
        tolerance = radius + self._cfg.arrival_slack

        if self._session is not None:
            log.info("Cancelling follow of %s for a one-shot move", self._session.target)
            self._teardown()

        pathfinder.set_goal(GoalNear(_position_of(target), radius))

        timed_out = False
        try:
            await asyncio.wait_for(self._wait_arrival(target, tolerance), timeout=timeout_s)
        except asyncio.TimeoutError:
            timed_out = True
            log.warning("Timeout reached while moving (%.1fs)", timeout_s)

        distance = self._distance_to(target)
        if distance is None:
            return ActionResult(False, "position_unknown", {"timed_out": timed_out})

        success = distance <= tolerance
        if success:
            error = None
        elif timed_out:
            error = "move_timeout"
        else:
            error = "too_far"

        details = {
            "distance": round(distance, 2),
            "tolerance": tolerance,
            "timed_out": timed_out,
        }
        log_event(
            self._bus,
            MODULE,
            EventType.MOVE_FINISHED,
            "Move finished" if success else f"Move failed: {error}",
            dict(details, success=success),
        )
        return ActionResult(success=success, error=error, details=details)

    async def _wait_arrival(self, target: MoveTarget, tolerance: float) -> None:
        pathfinder = self._world.pathfinder
        while True:
            await asyncio.sleep(self._cfg.poll_interval_s)
            distance = self._distance_to(target)
            if distance is not None and distance <= tolerance:
                return
            if pathfinder is None or not pathfinder.is_moving():
                return

    def _distance_to(self, target: MoveTarget) -> Optional[float]:
        me = self._world.position
        if me is None:
            return None
        return me.distance_to(_position_of(target))


def _position_of(target: MoveTarget) -> Position:
    return target.position if isinstance(target, EntityRef) else target
