# src/chat/throttle.py
"""
Inbound chat throttling.

Two independent gates, both checked before any language-service call:

- a global cooldown: after a message is accepted, all chat is ignored for
  `cooldown_s` (expiry is a Scheduler timer);
- a pending set: a sender with a request still in flight is ignored until
  that request finishes.
"""

from __future__ import annotations

import logging
from typing import Optional, Set

from agent.scheduler import Scheduler, TaskHandle


log = logging.getLogger(__name__)


class ChatThrottle:
    def __init__(self, scheduler: Scheduler, cooldown_s: float = 3.0) -> None:
        self._scheduler = scheduler
        self.cooldown_s = cooldown_s
        self._cooldown: Optional[TaskHandle] = None
        self._pending: Set[str] = set()

    @property
    def cooldown_active(self) -> bool:
        return self._cooldown is not None and self._cooldown.active

    @property
    def pending(self) -> Set[str]:
        return set(self._pending)

    def is_pending(self, sender: str) -> bool:
        return sender in self._pending

    def try_acquire(self, sender: str) -> bool:
        """
        Accept a message from `sender` if neither gate is closed.

        On success the cooldown is armed and the sender marked pending; the
        caller must release(sender) when done.
        """
        if self.cooldown_active:
            log.debug("Dropping chat from %s: cooldown active", sender)
            return False
        if sender in self._pending:
            log.debug("Dropping chat from %s: request already pending", sender)
            return False

        if self.cooldown_s > 0:
            self._cooldown = self._scheduler.call_later(
                self.cooldown_s, self._expire, name="chat-cooldown"
            )
        self._pending.add(sender)
        return True

    def release(self, sender: str) -> None:
        self._pending.discard(sender)

    def reset_cooldown(self) -> None:
        """Cancel the cooldown timer. Pending senders stay pending."""
        if self._cooldown is not None:
            self._cooldown.cancel()
            self._cooldown = None

    def _expire(self) -> None:
        self._cooldown = None
