# src/monitoring/__init__.py

from .bus import EventBus
from .events import EventType, MonitoringEvent
from .logger import JsonFileLogger, log_event

__all__ = [
    "EventBus",
    "EventType",
    "MonitoringEvent",
    "JsonFileLogger",
    "log_event",
]
