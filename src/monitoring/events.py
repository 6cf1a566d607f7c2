# src/monitoring/events.py
"""
Event schema for agent monitoring.

This module defines:
- EventType enum
- MonitoringEvent (structured runtime events)

All events are JSON-serializable via `.to_dict()` and are intended for use
with monitoring.bus.EventBus and monitoring.logger.JsonFileLogger.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum, auto
from typing import Any, Dict, Optional


# ============================================================
# Event Types
# ============================================================

class EventType(Enum):
    """Typed monitoring events emitted throughout the agent."""

    # Inbound chat and its classification
    CHAT_RECEIVED = auto()
    INTENT_CLASSIFIED = auto()
    CHAT_REPLY = auto()

    # Console / chat-issued commands
    COMMAND_EXECUTED = auto()

    # Movement supervisor
    FOLLOW_STARTED = auto()
    FOLLOW_STOPPED = auto()
    FOLLOW_LOST = auto()
    MOVE_FINISHED = auto()

    # Item transfer
    ITEM_GIVEN = auto()


# ============================================================
# Monitoring Event Structure
# ============================================================

@dataclass
class MonitoringEvent:
    """
    Runtime event emitted by the router, supervisor or command layer.

    All fields must be JSON-safe.
    """

    ts: float                   # UNIX timestamp (seconds)
    module: str                 # Source module ("bot_core.movement", "chat.router", ...)
    event_type: EventType
    message: str                # Short human-readable description
    payload: Dict[str, Any]     # Structured data (target, intent, counts)
    correlation_id: Optional[str] = None  # e.g. the chat sender

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dict for loggers."""
        data = asdict(self)
        data["event_type"] = self.event_type.name  # store name, not enum
        return data
