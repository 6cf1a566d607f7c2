# src/llm_stack/presets.py

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass
class RolePreset:
    """Configuration for a logical LLM role."""
    name: str
    temperature: float
    max_tokens: int
    system_prompt: Optional[str] = None
    user_template: str = "{message}"

    def messages(self, **fields: str) -> List[Dict[str, str]]:
        """Render the system + user message pair for one call."""
        out: List[Dict[str, str]] = []
        if self.system_prompt:
            out.append({"role": "system", "content": self.system_prompt})
        out.append({"role": "user", "content": self.user_template.format(**fields)})
        return out


CLASSIFY = RolePreset(
    name="classify",
    temperature=0.2,
    max_tokens=10,
    system_prompt=(
        "You are an intent classifier for a Minecraft bot. Classify the intent "
        "of the message into one of these categories: follow, give_item, "
        "come_here, stop_following, inventory, greeting, give_specific_item, "
        "other. Only respond with the category name, nothing else."
    ),
    user_template='Classify this message: "{message}"',
)

EXTRACT_ITEM = RolePreset(
    name="extract_item",
    temperature=0.3,
    max_tokens=20,
    system_prompt=(
        "You are an assistant that extracts item names from messages. Only "
        "respond with the exact item name, nothing else. If no item is "
        'mentioned, respond with "unknown".'
    ),
    user_template='Extract the Minecraft item name from this message: "{message}"',
)

ITEM_DETAILS = RolePreset(
    name="item_details",
    temperature=0.3,
    max_tokens=100,
    system_prompt=(
        "You are an assistant that extracts item details from messages. "
        'Respond with a JSON object containing "name" (string) and "count" '
        "(number) properties. If no item is mentioned, set name to null. If "
        "no count is specified, default to 1."
    ),
    user_template='Extract the item name and count from this message: "{message}"',
)

REPLY = RolePreset(
    name="reply",
    temperature=0.7,
    max_tokens=100,
    system_prompt=(
        "You are a helpful Minecraft bot assistant. Keep your responses short, "
        "friendly, and suitable for Minecraft chat (max 100 characters). Avoid "
        "complex formatting or long explanations."
    ),
    user_template=(
        'Player {username} said: "{message}". Respond to them in a brief, '
        "friendly way."
    ),
)
