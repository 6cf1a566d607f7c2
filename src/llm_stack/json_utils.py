# src/llm_stack/json_utils.py

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


def load_json_or_none(
    raw: str,
    *,
    context: str = "unknown",
) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    """
    Best-effort JSON loader.

    Returns (data, error_message). If parsing fails, or the payload is not a
    JSON object, data is None and error_message describes the failure.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        msg = f"{context}: JSONDecodeError at pos {e.pos}: {e.msg}"
        logger.debug("load_json_or_none failed: %s; raw=%r", msg, raw)
        return None, msg
    if not isinstance(data, dict):
        msg = f"{context}: expected JSON object, got {type(data).__name__}"
        logger.debug("load_json_or_none failed: %s; raw=%r", msg, raw)
        return None, msg
    return data, None


def extract_json_object(
    text: str,
    *,
    context: str = "unknown",
) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    """
    Locate the outermost {...} span in free model text and parse it.

    Models like to wrap JSON in prose or code fences; this takes the first
    '{' through the last '}'.
    """
    match = _OBJECT_RE.search(text or "")
    if match is None:
        return None, f"{context}: no JSON object in response"
    return load_json_or_none(match.group(0), context=context)
