# src/commands/custom.py
"""
Custom command table: trigger -> literal reply text.

Persisted under `custom_commands` in the configuration document. A trigger
may never collide with a built-in command name or alias; the check runs when
the trigger is created.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from agent.config import ConfigManager
from .errors import CommandError
from .registry import CommandRegistry


log = logging.getLogger(__name__)

SECTION = "custom_commands"


class CustomCommandTable:
    """View over config[`custom_commands`] with collision-checked writes."""

    def __init__(self, config: ConfigManager, registry: CommandRegistry) -> None:
        self._config = config
        self._registry = registry

    def entries(self) -> Dict[str, str]:
        raw = self._config.get(SECTION, {}) or {}
        return {str(k): str(v) for k, v in raw.items()}

    def get(self, trigger: str) -> Optional[str]:
        if not trigger:
            return None
        return self.entries().get(trigger.strip())

    def __contains__(self, trigger: str) -> bool:
        return self.get(trigger) is not None

    def add(self, trigger: str, reply: str) -> None:
        """
        Create or overwrite a trigger.

        Raises CommandError("reserved_trigger") when the trigger is a
        built-in name or alias, CommandError("usage") for empty input.
        """
        trigger = (trigger or "").strip()
        reply = (reply or "").strip()
        if not trigger or not reply:
            raise CommandError("usage", "Usage: custom add <name> <action>")
        if self._registry.is_reserved(trigger):
            raise CommandError(
                "reserved_trigger",
                f"Cannot add custom command: '{trigger}' is already a built-in command or alias.",
                {"trigger": trigger},
            )
        self._config.update({SECTION: {trigger: reply}})
        log.info("Added custom command: %s -> %s", trigger, reply)

    def remove(self, trigger: str) -> None:
        entries = self.entries()
        if trigger not in entries:
            raise CommandError(
                "not_found",
                f"Custom command '{trigger}' does not exist.",
                {"trigger": trigger},
            )
        del entries[trigger]
        self._config.replace_section(SECTION, entries)
        log.info("Removed custom command: %s", trigger)
