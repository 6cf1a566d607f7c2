# src/monitoring/logger.py
"""
Event sinks and the publishing helper.

    sink = JsonFileLogger(Path("logs/events.jsonl"), bus)
    log_event(bus, "chat.router", EventType.CHAT_RECEIVED,
              "Chat from Steve", {"text": "follow me"}, correlation_id="Steve")
    ...
    sink.close()

The event log is enabled by `logging.event_log` in the config document.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional

from .bus import EventBus
from .events import EventType, MonitoringEvent


log = logging.getLogger(__name__)


class JsonFileLogger:
    """
    Appends every event on `bus` to a JSON-lines file (UTF-8).

    The parent directory is created on construction. Write errors drop the
    event with a warning.
    """

    def __init__(self, path: Path, bus: EventBus) -> None:
        self._path = Path(path)
        self._bus = bus
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self._path.open("a", encoding="utf-8")
        bus.subscribe(self._write)

    @property
    def path(self) -> Path:
        return self._path

    def _write(self, event: MonitoringEvent) -> None:
        record = json.dumps(event.to_dict(), ensure_ascii=False, default=str)
        try:
            self._file.write(f"{record}\n")
            self._file.flush()
        except (OSError, ValueError) as exc:
            log.warning("Could not write event to %s: %s", self._path, exc)

    def close(self) -> None:
        self._bus.unsubscribe(self._write)
        if not self._file.closed:
            self._file.close()


def log_event(
    bus: Optional[EventBus],
    module: str,
    event_type: EventType,
    message: str,
    payload: Optional[Dict[str, Any]] = None,
    correlation_id: Optional[str] = None,
) -> None:
    """Publish one MonitoringEvent; a None bus makes this a no-op."""
    if bus is None:
        return
    bus.publish(
        MonitoringEvent(
            ts=time.time(),
            module=module,
            event_type=event_type,
            message=message,
            payload=dict(payload or {}),
            correlation_id=correlation_id,
        )
    )
