# src/spec/__init__.py

from __future__ import annotations

"""
Public spec surface for core Humini agent types.

This module re-exports *interfaces and data types* used across the codebase:
  - world primitives (Position, EntityRef, HeldItem) and ActionResult
  - the WorldClient / Pathfinder collaborator protocols and movement goals
  - the ChatBackend transport and IntentModel role protocols
  - the Command protocol and DispatchResult

Deliberately does NOT export concrete implementations; runtime wiring lives
in src/agent/.
"""

from .types import (
    ActionResult,
    EntityRef,
    HeldItem,
    Intent,
    ItemRequest,
    Position,
)

from .world import (
    Goal,
    GoalFollow,
    GoalNear,
    Pathfinder,
    WorldClient,
)

from .llm import (
    ChatBackend,
    ChatMessage,
    IntentModel,
)

from .commands import (
    Command,
    DispatchResult,
)

__all__ = [
    # World / actions
    "ActionResult",
    "EntityRef",
    "HeldItem",
    "Intent",
    "ItemRequest",
    "Position",
    # Collaborators
    "Goal",
    "GoalFollow",
    "GoalNear",
    "Pathfinder",
    "WorldClient",
    # LLM
    "ChatBackend",
    "ChatMessage",
    "IntentModel",
    # Commands
    "Command",
    "DispatchResult",
]
