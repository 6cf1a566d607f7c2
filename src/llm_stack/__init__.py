# src/llm_stack/__init__.py
"""
Language-service layer: chat-completion transports plus the intent roles
built on them.
"""

from .backend import HttpChatBackend, create_chat_backend, parse_completion
from .config import LLMConfig
from .errors import LLMServiceError
from .intents import IntentClassifier, label_to_intent, truncate_reply
from .items import ITEM_SYNONYMS, canonical_item_name

__all__ = [
    "HttpChatBackend",
    "create_chat_backend",
    "parse_completion",
    "LLMConfig",
    "LLMServiceError",
    "IntentClassifier",
    "label_to_intent",
    "truncate_reply",
    "ITEM_SYNONYMS",
    "canonical_item_name",
]
