# src/commands/registry.py
"""
Command registry: textual input -> executable command.

Responsibilities:
- index commands by lower-cased name and alias
- resolve a token (exact name first, then alias)
- dispatch a line: split, resolve, invoke, capture failures
- hot reload: swap the whole index in one step

Non-responsibilities:
- custom command fallback (callers consult CustomCommandTable on "unhandled")
- argument parsing beyond the whitespace split (each command owns its args)
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Sequence, Tuple

from monitoring.bus import EventBus
from monitoring.events import EventType
from monitoring.logger import log_event
from spec.commands import Command, DispatchResult
from .errors import CommandError

if TYPE_CHECKING:
    from agent.context import AgentContext


log = logging.getLogger(__name__)

MODULE = "commands.registry"

# (name -> command, alias -> name); replaced as a unit
_Index = Tuple[Dict[str, Command], Dict[str, str]]


# ---------------------------------------------------------------------------
# Invocation record
# ---------------------------------------------------------------------------


@dataclass
class CommandCall:
    """
    Everything a command needs for one invocation.

    `sender` is None for console input and the player name for commands
    issued from game chat. reply()/warn() route feedback accordingly:
    console feedback goes to the log, chat feedback goes back to the game.
    """

    context: "AgentContext"
    args: List[str] = field(default_factory=list)
    invoked_as: str = ""
    sender: Optional[str] = None
    line: str = ""

    @property
    def from_chat(self) -> bool:
        return self.sender is not None

    @property
    def config(self) -> Dict[str, Any]:
        return self.context.config.data

    def reply(self, message: str) -> None:
        if self.sender is not None:
            self.context.world.chat(message)
        else:
            log.info(message)

    def warn(self, message: str) -> None:
        if self.sender is not None:
            self.context.world.chat(message)
        else:
            log.warning(message)


# ---------------------------------------------------------------------------
# Base class for built-in commands
# ---------------------------------------------------------------------------


class CommandImplBase(Command):
    """
    Base class for command implementations.

    Subclasses must:
    - set `command_name` (and optionally `command_aliases`, `command_description`)
    - implement `invoke(call)`, sync or async
    """

    command_name: str = ""               # override in subclasses
    command_aliases: Sequence[str] = ()
    command_description: str = ""
    usage: str = ""

    @property
    def name(self) -> str:
        return self.command_name

    @property
    def aliases(self) -> Sequence[str]:
        return tuple(self.command_aliases)

    @property
    def description(self) -> str:
        return self.command_description

    def invoke(self, call: CommandCall) -> Any:
        raise NotImplementedError("CommandImplBase subclasses must override invoke()")

    def usage_error(self) -> CommandError:
        return CommandError("usage", f"Usage: {self.usage or self.command_name}")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.command_name!r}>"


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class CommandRegistry:
    """
    name(lower) -> Command and alias(lower) -> name.

    Invariants:
    - every alias maps to a registered name
    - no alias equals a command name; a command claiming a name that is
      currently an alias takes it over and the alias binding is dropped
    """

    def __init__(self, *, bus: Optional[EventBus] = None) -> None:
        self._bus = bus
        self._index: _Index = ({}, {})

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, command: Command) -> bool:
        """Index one command. Returns False (and logs) for invalid input."""
        commands, aliases = dict(self._index[0]), dict(self._index[1])
        if not self._add(commands, aliases, command):
            return False
        self._index = (commands, aliases)
        return True

    def bulk_reload(self, commands: Iterable[Command]) -> int:
        """
        Replace every registration with `commands`.

        The new index is built off to the side and swapped in with a single
        assignment, so no caller ever sees a half-loaded registry.
        """
        new_commands: Dict[str, Command] = {}
        new_aliases: Dict[str, str] = {}
        for command in commands:
            self._add(new_commands, new_aliases, command)

        old_count = len(self._index[0])
        self._index = (new_commands, new_aliases)
        log.info(
            "Loaded %d commands with %d aliases (was %d commands)",
            len(new_commands),
            len(new_aliases),
            old_count,
        )
        return len(new_commands)

    @staticmethod
    def _add(commands: Dict[str, Command], aliases: Dict[str, str], command: Command) -> bool:
        raw_name = getattr(command, "name", "") or ""
        name = str(raw_name).strip().lower()
        if not name:
            log.warning("Invalid command %r: commands must have a name", command)
            return False
        if not callable(getattr(command, "invoke", None)):
            log.warning("Invalid command %r: commands must have an invoke capability", name)
            return False

        if name in aliases:
            log.debug("'%s' was an alias of '%s'; now a command", name, aliases[name])
            del aliases[name]

        if name in commands:
            log.debug("Replacing command '%s'", name)
            for alias in [a for a, target in aliases.items() if target == name]:
                del aliases[alias]

        commands[name] = command
        log.debug("Registered command: %s", name)

        for raw_alias in getattr(command, "aliases", ()) or ():
            alias = str(raw_alias).strip().lower()
            if not alias or alias == name:
                continue
            if alias in commands:
                log.warning("Alias '%s' of '%s' shadows a command name; skipped", alias, name)
                continue
            aliases[alias] = name
            log.debug("Registered alias: %s -> %s", alias, name)
        return True

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def resolve(self, token: str) -> Optional[Command]:
        commands, aliases = self._index
        key = (token or "").strip().lower()
        if not key:
            return None
        command = commands.get(key)
        if command is not None:
            return command
        target = aliases.get(key)
        return commands.get(target) if target is not None else None

    def get(self, name: str) -> Optional[Command]:
        return self._index[0].get((name or "").lower())

    def commands(self) -> List[Command]:
        commands = self._index[0]
        return [commands[k] for k in sorted(commands)]

    def aliases(self) -> Dict[str, str]:
        return dict(self._index[1])

    def aliases_of(self, name: str) -> List[str]:
        key = (name or "").lower()
        return sorted(a for a, target in self._index[1].items() if target == key)

    def is_reserved(self, token: str) -> bool:
        """True when `token` is a built-in name or alias (case-insensitive)."""
        key = (token or "").strip().lower()
        commands, aliases = self._index
        return key in commands or key in aliases

    def __len__(self) -> int:
        return len(self._index[0])

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def dispatch(
        self,
        line: str,
        context: "AgentContext",
        *,
        sender: Optional[str] = None,
    ) -> DispatchResult:
        """
        Split `line`, resolve the first token and invoke the command.

        Never raises: handler failures are logged and reported as
        execution_failed.
        """
        parts = (line or "").split()
        if not parts:
            return DispatchResult(status="empty")

        token, args = parts[0].lower(), parts[1:]
        command = self.resolve(token)
        if command is None:
            return DispatchResult(status="unhandled", invoked_as=token, args=args)

        name = str(command.name).lower()
        call = CommandCall(
            context=context,
            args=list(args),
            invoked_as=token,
            sender=sender,
            line=line.strip(),
        )

        try:
            value = command.invoke(call)
            if inspect.isawaitable(value):
                value = await value
        except CommandError as exc:
            call.warn(str(exc))
            result = DispatchResult("execution_failed", name, token, exc.code, args=args)
        except Exception as exc:
            log.exception("Error executing command %s: %s", token, exc)
            call.warn(f"Error executing command {token}: {exc}")
            result = DispatchResult("execution_failed", name, token, "exception", args=args)
        else:
            result = DispatchResult("ok", name, token, None, value, args=args)

        log_event(
            self._bus,
            MODULE,
            EventType.COMMAND_EXECUTED,
            f"{name} -> {result.status}",
            {"command": name, "invoked_as": token, "args": args, "status": result.status,
             "error": result.error, "sender": sender},
            correlation_id=sender,
        )
        return result
