# src/llm_stack/errors.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class LLMServiceError(RuntimeError):
    """
    Failure talking to the language service.

    Codes:
        "transport"  - connection error, timeout, no credential
        "status"     - non-success HTTP status (details carry status/body)
        "malformed"  - response without choices[0].message.content
    """

    code: str
    details: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"LLMServiceError(code={self.code!r}, details={self.details!r})"
