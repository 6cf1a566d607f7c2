# src/bot_core/client.py
"""
WorldClient construction from the `bot` config section.

The game-protocol client itself lives outside this project. A deployment
names its adapter class in config:

    bot:
      client: "my_adapter.world:MineflayerBridge"

The class is imported lazily and constructed with the `bot` mapping.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any, Mapping

from spec.world import WorldClient


log = logging.getLogger(__name__)


def create_world_client(bot_cfg: Mapping[str, Any], *, offline: bool = False) -> WorldClient:
    """
    Build the WorldClient for this run.

    offline=True, or no `bot.client` configured, gives an OfflineWorld.
    """
    username = str(bot_cfg.get("username") or "Humini")
    target = bot_cfg.get("client")

    # Lazy imports to avoid cycles.
    if offline or not target:
        from .offline import OfflineWorld

        if not offline:
            log.warning("No bot.client adapter configured; starting offline")
        return OfflineWorld(username)

    module_name, _, attr = str(target).partition(":")
    if not module_name or not attr:
        raise ValueError(f"bot.client must look like 'package.module:ClassName', got {target!r}")

    module = importlib.import_module(module_name)
    factory = getattr(module, attr)
    log.info("Creating world client %s for %s", target, username)
    return factory(dict(bot_cfg))
