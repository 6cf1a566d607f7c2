# src/llm_stack/intents.py
"""
Intent classification and item extraction over a ChatBackend.

IntentClassifier is the only IntentModel implementation. It owns the four
language-service roles used by the chat router:

    classify(message)             -> Intent           (never raises)
    extract_item(message)         -> str | None       (never raises)
    extract_item_details(message) -> ItemRequest      (never raises)
    generate_reply(user, message) -> str              (raises LLMServiceError)

Classification normalises the model's label and takes an exact match first.
Only when the label is not one of the known intents does the ordered keyword
scan apply; that scan is a heuristic and may misroute free-form labels.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Dict, Optional, Sequence, Tuple

from spec.llm import ChatBackend, IntentModel
from spec.types import Intent, ItemRequest
from . import presets
from .errors import LLMServiceError
from .items import canonical_item_name
from .json_utils import extract_json_object
from .presets import RolePreset


log = logging.getLogger(__name__)

MAX_REPLY_CHARS = 100

_LABEL_STRIP_RE = re.compile(r"[^a-z0-9_\s-]")
_LABEL_SPACE_RE = re.compile(r"[\s-]+")
_FIRST_INT_RE = re.compile(r"\b(\d+)\b")

# (required keywords, intent); first row whose keywords all appear wins
_KEYWORD_RULES: Sequence[Tuple[Tuple[str, ...], Intent]] = (
    (("follow",), Intent.FOLLOW),
    (("give", "specific"), Intent.GIVE_SPECIFIC_ITEM),
    (("give",), Intent.GIVE_ITEM),
    (("item",), Intent.GIVE_ITEM),
    (("come",), Intent.COME_HERE),
    (("stop",), Intent.STOP_FOLLOWING),
    (("inventory",), Intent.INVENTORY),
    (("greet",), Intent.GREETING),
)

_LABELS: Dict[str, Intent] = {intent.value: intent for intent in Intent}


def normalize_label(raw: str) -> str:
    """'Stop following.' -> 'stop_following'."""
    text = _LABEL_STRIP_RE.sub("", (raw or "").strip().lower())
    return _LABEL_SPACE_RE.sub("_", text).strip("_")


def label_to_intent(raw: str) -> Intent:
    """Map a model label onto the fixed intent set."""
    label = normalize_label(raw)
    if label in _LABELS:
        return _LABELS[label]

    text = (raw or "").lower()
    for keywords, intent in _KEYWORD_RULES:
        if all(k in text for k in keywords):
            return intent
    return Intent.OTHER


def truncate_reply(text: str, limit: int = MAX_REPLY_CHARS) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def first_integer(message: str) -> Optional[int]:
    match = _FIRST_INT_RE.search(message or "")
    return int(match.group(1)) if match else None


def _coerce_count(value: Any) -> int:
    if isinstance(value, bool):
        return 1
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        # json.loads accepts Infinity, NaN and 1e999
        return int(value) if math.isfinite(value) else 1
    if isinstance(value, str):
        match = re.match(r"\s*(-?\d+)", value)
        if match:
            return int(match.group(1))
    return 1


class IntentClassifier(IntentModel):
    """IntentModel backed by a ChatBackend, one preset per role."""

    def __init__(
        self,
        backend: ChatBackend,
        *,
        classify_preset: RolePreset = presets.CLASSIFY,
        extract_preset: RolePreset = presets.EXTRACT_ITEM,
        details_preset: RolePreset = presets.ITEM_DETAILS,
        reply_preset: RolePreset = presets.REPLY,
    ) -> None:
        self._backend = backend
        self._classify = classify_preset
        self._extract = extract_preset
        self._details = details_preset
        self._reply = reply_preset

    @property
    def backend(self) -> ChatBackend:
        return self._backend

    async def _call(self, preset: RolePreset, **fields: str) -> str:
        return await self._backend.complete(
            preset.messages(**fields),
            max_tokens=preset.max_tokens,
            temperature=preset.temperature,
        )

    # ------------------------------------------------------------------
    # Roles
    # ------------------------------------------------------------------

    async def classify(self, message: str) -> Intent:
        try:
            raw = await self._call(self._classify, message=message)
        except Exception as exc:
            log.error("Error analyzing intent: %s", exc)
            return Intent.OTHER

        intent = label_to_intent(raw)
        log.debug("classify %r -> label %r -> %s", message, raw, intent.value)
        return intent

    async def extract_item(self, message: str) -> Optional[str]:
        try:
            raw = await self._call(self._extract, message=message)
        except Exception as exc:
            log.error("Error extracting item from message: %s", exc)
            return None

        answer = raw.strip().lower()
        if not answer or answer == "unknown" or "no item" in answer:
            return None
        return canonical_item_name(answer)

    async def extract_item_details(self, message: str) -> ItemRequest:
        try:
            raw = await self._call(self._details, message=message)
        except Exception as exc:
            log.error("Error extracting item details: %s", exc)
            return ItemRequest(None, 1)

        data, err = extract_json_object(raw, context="item_details")
        if data is not None:
            name = data.get("name")
            if isinstance(name, str) and canonical_item_name(name):
                return ItemRequest(canonical_item_name(name), _coerce_count(data.get("count", 1)))
        else:
            log.debug("item details not parseable (%s); falling back", err)

        name = await self.extract_item(message)
        return ItemRequest(name, first_integer(message) or 1)

    async def generate_reply(self, username: str, message: str) -> str:
        text = await self._call(self._reply, username=username, message=message)
        if not text:
            raise LLMServiceError("malformed", {"error": "empty reply"})
        return truncate_reply(text)
