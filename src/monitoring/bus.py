# src/monitoring/bus.py
"""
In-process pub/sub for MonitoringEvents.

Publishers: command registry, movement supervisor, item giver, chat router.
Subscribers: JsonFileLogger and tests asserting on emitted events.

A subscriber may narrow delivery to a set of EventTypes. Delivery happens
synchronously on the publishing thread, in subscription order.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Callable, FrozenSet, Iterable, List, Optional, Tuple

from .events import EventType, MonitoringEvent


log = logging.getLogger(__name__)

SubscriberFn = Callable[[MonitoringEvent], None]

# (callback, accepted event types or None for all)
_Subscription = Tuple[SubscriberFn, Optional[FrozenSet[EventType]]]


class EventBus:
    """
    Fan-out of MonitoringEvents to registered callbacks.

    - The subscription list is guarded by a Lock; the console reader thread
      may publish while the loop thread subscribes.
    - A subscriber that raises is logged and skipped; the rest still receive
      the event.
    """

    def __init__(self) -> None:
        self._subs: List[_Subscription] = []
        self._lock = Lock()

    def subscribe(
        self,
        fn: SubscriberFn,
        *,
        types: Optional[Iterable[EventType]] = None,
    ) -> None:
        """Deliver events to `fn`; only those in `types` when given."""
        accepted = frozenset(types) if types is not None else None
        with self._lock:
            self._subs.append((fn, accepted))

    def unsubscribe(self, fn: SubscriberFn) -> None:
        """Drop every subscription of `fn`. Unknown callbacks are ignored."""
        with self._lock:
            self._subs = [s for s in self._subs if s[0] != fn]

    def publish(self, event: MonitoringEvent) -> None:
        with self._lock:
            targets = [fn for fn, accepted in self._subs if accepted is None or event.event_type in accepted]

        for fn in targets:
            try:
                fn(event)
            except Exception:
                log.exception("Monitoring subscriber %r failed on %s", fn, event.event_type.name)

    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subs)
