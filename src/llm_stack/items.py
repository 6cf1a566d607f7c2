# src/llm_stack/items.py
"""
Item-name canonicalisation.

Free-form names from players or the model ("some wood", "the Iron") are
mapped onto the identifiers the inventory uses: strip a leading article,
lowercase, then apply the synonym table. Unknown names pass through.
"""

from __future__ import annotations

import re
from typing import Dict, Optional

ITEM_SYNONYMS: Dict[str, str] = {
    "wood": "log",
    "wooden planks": "planks",
    "stone": "cobblestone",
    "iron": "iron_ingot",
    "gold": "gold_ingot",
    "diamond": "diamond",
    "food": "bread",
    "sword": "iron_sword",
    "pickaxe": "iron_pickaxe",
    "axe": "iron_axe",
    "shovel": "iron_shovel",
    "hoe": "iron_hoe",
    "stick": "stick",
    "coal": "coal",
    "bow": "bow",
    "arrow": "arrow",
    "torch": "torch",
    "dirt": "dirt",
    "sand": "sand",
    "gravel": "gravel",
    "apple": "apple",
}

_ARTICLE_RE = re.compile(r"^(a|an|the|some)\s+", re.IGNORECASE)


def strip_article(name: str) -> str:
    return _ARTICLE_RE.sub("", name.strip())


def canonical_item_name(raw: Optional[str]) -> Optional[str]:
    """Return the inventory identifier for `raw`, or None for empty input."""
    if raw is None:
        return None
    name = strip_article(str(raw).strip().strip(".!?\"'")).lower().strip()
    if not name:
        return None
    return ITEM_SYNONYMS.get(name, name)
