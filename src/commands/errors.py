# src/commands/errors.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class CommandError(RuntimeError):
    """
    Expected command failure (bad arguments, name collision, missing capability).

    The registry reports these as execution_failed with `code` as the error,
    without a traceback.

    Codes used by the built-ins:
        "usage"            wrong or missing arguments
        "reserved_trigger" custom trigger collides with a built-in name/alias
        "not_found"        unknown custom trigger
        "unavailable"      a required capability is not configured
    """

    code: str
    message: str = ""
    details: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message or f"CommandError(code={self.code!r}, details={self.details!r})"
