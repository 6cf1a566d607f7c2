# src/commands/__init__.py
"""Console / chat command surface: registry, custom table, built-ins."""

from .errors import CommandError
from .registry import CommandCall, CommandImplBase, CommandRegistry

__all__ = ["CommandError", "CommandCall", "CommandImplBase", "CommandRegistry"]
