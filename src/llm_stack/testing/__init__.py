# src/llm_stack/testing/__init__.py

from .fakes import RecordedCall, ScriptedChatBackend

__all__ = ["RecordedCall", "ScriptedChatBackend"]
