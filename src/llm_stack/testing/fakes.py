# src/llm_stack/testing/fakes.py
"""
Test helpers for llm_stack.

Provides:
- ScriptedChatBackend: ChatBackend that replays canned replies per role.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from spec.llm import ChatBackend, ChatMessage


Reply = Union[str, BaseException]


@dataclass
class RecordedCall:
    """One complete() call seen by ScriptedChatBackend."""

    messages: List[ChatMessage]
    max_tokens: int
    temperature: float

    @property
    def system(self) -> str:
        for m in self.messages:
            if m.get("role") == "system":
                return m.get("content", "")
        return ""

    @property
    def user(self) -> str:
        return self.messages[-1].get("content", "") if self.messages else ""


@dataclass
class ScriptedChatBackend(ChatBackend):
    """
    In-memory ChatBackend for unit tests.

    Replies are picked by role, detected from the system prompt:
    "intent classifier" -> classify, "item details" -> details,
    "item names" -> extract, anything else -> reply. Each role holds a
    queue; the last entry repeats once the queue is down to one. An
    exception instance in the queue is raised instead of returned.
    """

    classify: List[Reply] = field(default_factory=lambda: ["other"])
    extract: List[Reply] = field(default_factory=lambda: ["unknown"])
    details: List[Reply] = field(default_factory=lambda: ['{"name": null, "count": 1}'])
    reply: List[Reply] = field(default_factory=lambda: ["Hello!"])
    calls: List[RecordedCall] = field(default_factory=list)
    closed: bool = False

    def _queue_for(self, system: str) -> List[Reply]:
        text = system.lower()
        if "intent classifier" in text:
            return self.classify
        if "item details" in text:
            return self.details
        if "item names" in text:
            return self.extract
        return self.reply

    def calls_for(self, role: str) -> List[RecordedCall]:
        return [c for c in self.calls if self._role_of(c.system) == role]

    def _role_of(self, system: str) -> str:
        queue = self._queue_for(system)
        for role in ("classify", "extract", "details", "reply"):
            if getattr(self, role) is queue:
                return role
        return "reply"

    async def complete(
        self,
        messages: List[ChatMessage],
        *,
        max_tokens: int,
        temperature: float,
    ) -> str:
        call = RecordedCall([dict(m) for m in messages], max_tokens, temperature)
        self.calls.append(call)
        queue = self._queue_for(call.system)
        item: Optional[Reply] = queue.pop(0) if len(queue) > 1 else (queue[0] if queue else "")
        if isinstance(item, BaseException):
            raise item
        return item or ""

    async def close(self) -> None:
        self.closed = True
