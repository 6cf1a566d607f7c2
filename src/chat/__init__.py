# src/chat/__init__.py
"""Inbound game chat: throttling and intent routing."""

from .router import ChatCommandRouter
from .throttle import ChatThrottle

__all__ = ["ChatCommandRouter", "ChatThrottle"]
