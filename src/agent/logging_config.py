# src/agent/logging_config.py
"""
Central logging configuration for the Humini agent.

Call configure_logging() from the entrypoint once:

    from agent.logging_config import configure_logging
    configure_logging()

The `debug on|off` console command flips verbosity at runtime through
set_debug().
"""

from __future__ import annotations

import logging
import sys
from typing import Union


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Configure root logging if no handlers are attached yet.

    Args:
        level: default logging level (logging.INFO, "DEBUG", ...)
    """
    root = logging.getLogger()

    # Don't duplicate handlers if someone already configured logging.
    if root.handlers:
        return

    handler = logging.StreamHandler(stream=sys.stdout)
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )
    handler.setFormatter(formatter)
    root.addHandler(handler)
    root.setLevel(_coerce_level(level))


def set_debug(enabled: bool) -> None:
    """Switch the root logger between DEBUG and INFO."""
    logging.getLogger().setLevel(logging.DEBUG if enabled else logging.INFO)


def is_debug() -> bool:
    return logging.getLogger().getEffectiveLevel() <= logging.DEBUG


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.INFO
