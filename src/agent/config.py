# src/agent/config.py
"""
Persistent configuration for the Humini agent.

One YAML document (default: config/agent.yaml) holds every runtime setting:

    bot:              connection identity (host, port, username, version)
    ai_chat:          language-service credential and call settings
    movement:         follow / approach tuning
    custom_commands:  trigger -> literal reply text
    chat_commands:    prefix + allow-list for commands issued from game chat
    logging:          root level and optional JSONL event log

ConfigManager is the only writer. Mutations go through update()/set(), which
deep-merge into the current document and rewrite the file in place, so the
file on disk always mirrors the live configuration.
"""

from __future__ import annotations

import copy
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml


log = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "agent.yaml"


# ---------------------------------------------------------------------------
# Domain errors
# ---------------------------------------------------------------------------


@dataclass
class ConfigError(RuntimeError):
    """
    Raised when the configuration document cannot be read or written.

    Attributes:
        code: Short machine-readable code ("not_found", "parse", "shape", "write").
        details: Extra context (path, underlying message).
    """

    code: str
    details: Dict[str, Any]

    def __str__(self) -> str:
        return f"ConfigError(code={self.code!r}, details={self.details!r})"


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_CONFIG: Dict[str, Any] = {
    "bot": {
        "host": "localhost",
        "port": 25565,
        "username": "Humini",
        "version": None,
        "owner": None,
        "client": None,
    },
    "ai_chat": {
        "enabled": False,
        "api_key": "",
        "backend": "http",
        "endpoint": "https://api.mistral.ai/v1/chat/completions",
        "model": "mistral-tiny",
        "model_path": None,
        "timeout_s": 10.0,
        "cooldown_ms": 3000,
    },
    "movement": {
        "follow_distance": 1.0,
        "look_interval_ms": 800,
        "approach_radius": 2.0,
        "arrival_slack": 1.0,
        "poll_interval_ms": 500,
        "move_timeout_ms": 15000,
    },
    "custom_commands": {},
    "chat_commands": {
        "prefix": "!",
        "allowed_users": [],
    },
    "logging": {
        "level": "INFO",
        "show_chat": True,
        "event_log": None,
    },
}


def deep_merge(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Return a new dict with `overlay` merged into `base`.

    Nested mappings are merged key by key; every other value in `overlay`
    replaces the one in `base`. Neither input is modified.
    """
    merged: Dict[str, Any] = copy.deepcopy(dict(base))
    for key, value in overlay.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


# ---------------------------------------------------------------------------
# Typed views
# ---------------------------------------------------------------------------


@dataclass
class MovementConfig:
    """Follow / approach tuning, times in seconds."""

    follow_distance: float = 1.0
    check_interval_s: float = 0.8
    approach_radius: float = 2.0
    arrival_slack: float = 1.0
    poll_interval_s: float = 0.5
    move_timeout_s: float = 15.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MovementConfig":
        return cls(
            follow_distance=float(data.get("follow_distance", 1.0)),
            check_interval_s=float(data.get("look_interval_ms", 800)) / 1000.0,
            approach_radius=float(data.get("approach_radius", 2.0)),
            arrival_slack=float(data.get("arrival_slack", 1.0)),
            poll_interval_s=float(data.get("poll_interval_ms", 500)) / 1000.0,
            move_timeout_s=float(data.get("move_timeout_ms", 15000)) / 1000.0,
        )


@dataclass
class ChatConfig:
    """Settings for inbound chat handling."""

    ai_enabled: bool = False
    cooldown_s: float = 3.0
    show_chat: bool = True
    command_prefix: str = "!"
    allowed_users: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ChatConfig":
        ai = data.get("ai_chat") or {}
        cmds = data.get("chat_commands") or {}
        logging_cfg = data.get("logging") or {}
        return cls(
            ai_enabled=bool(ai.get("enabled", False)),
            cooldown_s=float(ai.get("cooldown_ms", 3000)) / 1000.0,
            show_chat=bool(logging_cfg.get("show_chat", True)),
            command_prefix=str(cmds.get("prefix") or "!"),
            allowed_users=[str(u).lower() for u in (cmds.get("allowed_users") or [])],
        )


# ---------------------------------------------------------------------------
# Manager
# ---------------------------------------------------------------------------


class ConfigManager:
    """
    Owns the configuration document and its file.

    - load(): read the file (missing file -> defaults written out)
    - reload(): re-read; on failure keep the current document and re-raise
    - update(partial): deep-merge + rewrite
    - get("a.b", default) / set("a.b", value): dotted-path helpers
    """

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
        self._data: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def data(self) -> Dict[str, Any]:
        """Deep copy of the live document."""
        return copy.deepcopy(self._data)

    def load(self) -> Dict[str, Any]:
        if not self.path.exists():
            log.warning("Config file %s not found; writing defaults", self.path)
            self._data = copy.deepcopy(DEFAULT_CONFIG)
            self._write()
            return self.data

        self._data = deep_merge(DEFAULT_CONFIG, self._read_file())
        log.info("Loaded configuration from %s", self.path)
        return self.data

    def reload(self) -> Dict[str, Any]:
        """Re-read the file. The current document survives a failed read."""
        raw = self._read_file()
        self._data = deep_merge(DEFAULT_CONFIG, raw)
        log.info("Reloaded configuration from %s", self.path)
        return self.data

    def get(self, dotted: str, default: Any = None) -> Any:
        node: Any = self._data
        for part in dotted.split("."):
            if not isinstance(node, Mapping) or part not in node:
                return default
            node = node[part]
        return copy.deepcopy(node)

    def section(self, name: str) -> Dict[str, Any]:
        value = self._data.get(name)
        return copy.deepcopy(value) if isinstance(value, Mapping) else {}

    def movement(self) -> MovementConfig:
        return MovementConfig.from_dict(self.section("movement"))

    def chat(self) -> ChatConfig:
        return ChatConfig.from_dict(self._data)

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------

    def update(self, partial: Mapping[str, Any]) -> Dict[str, Any]:
        """Merge `partial` into the document and persist it."""
        self._data = deep_merge(self._data, partial)
        self._write()
        return self.data

    def set(self, dotted: str, value: Any) -> Dict[str, Any]:
        partial: Dict[str, Any] = {}
        node = partial
        parts = dotted.split(".")
        for part in parts[:-1]:
            node = node.setdefault(part, {})
        node[parts[-1]] = value
        return self.update(partial)

    def replace_section(self, name: str, value: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Replace a whole top-level mapping (merge cannot delete keys).

        Used when entries are removed, e.g. a custom command.
        """
        self._data[name] = copy.deepcopy(dict(value))
        self._write()
        return self.data

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _read_file(self) -> Dict[str, Any]:
        if not self.path.exists():
            raise ConfigError("not_found", {"path": str(self.path)})
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError("parse", {"path": str(self.path), "error": str(exc)}) from exc
        if not isinstance(data, dict):
            raise ConfigError(
                "shape",
                {"path": str(self.path), "error": f"expected mapping, got {type(data).__name__}"},
            )
        return data

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=".agent-", suffix=".yaml", dir=str(self.path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                yaml.safe_dump(self._data, f, sort_keys=False, default_flow_style=False)
            os.replace(tmp, self.path)
        except OSError as exc:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise ConfigError("write", {"path": str(self.path), "error": str(exc)}) from exc
        log.debug("Wrote configuration to %s", self.path)


def load_config(path: Optional[Path | str] = None) -> ConfigManager:
    """Create a ConfigManager for `path` and load it."""
    manager = ConfigManager(path)
    manager.load()
    return manager
