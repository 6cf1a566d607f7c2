# src/commands/loader.py
"""
Discovery of the built-in commands under commands.base.

Every module in the package is imported (re-imported on reload) and each
CommandImplBase subclass defined there with a command_name is instantiated
once. The result feeds CommandRegistry.bulk_reload().
"""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from typing import List

from .registry import CommandImplBase


log = logging.getLogger(__name__)

BUILTIN_PACKAGE = "commands.base"


def load_builtin_commands(
    package_name: str = BUILTIN_PACKAGE,
    *,
    reload: bool = False,
) -> List[CommandImplBase]:
    """
    Instantiate every built-in command.

    A module that fails to import is logged and skipped; the others still load.
    """
    commands: List[CommandImplBase] = []
    try:
        package = importlib.import_module(package_name)
    except ImportError:
        log.exception("Cannot import command package %s", package_name)
        return commands

    for info in sorted(pkgutil.iter_modules(package.__path__), key=lambda i: i.name):
        if info.name.startswith("_"):
            continue
        full_name = f"{package_name}.{info.name}"
        try:
            module = importlib.import_module(full_name)
            if reload:
                module = importlib.reload(module)
        except Exception:
            log.exception("Failed to load command module %s", full_name)
            continue

        for _, obj in inspect.getmembers(module, inspect.isclass):
            if (
                issubclass(obj, CommandImplBase)
                and obj is not CommandImplBase
                and obj.__module__ == module.__name__
                and obj.command_name
            ):
                commands.append(obj())

    log.debug("Discovered %d built-in commands", len(commands))
    return commands
