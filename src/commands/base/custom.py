# src/commands/base/custom.py

from rich.table import Table

from commands.registry import CommandCall, CommandImplBase

HELP_LINES = (
    "custom list                - List all custom commands",
    "custom add <name> <action> - Add a new custom command",
    "custom remove <name>       - Remove a custom command",
    "custom run <name>          - Run a custom command",
)


class CustomCommand(CommandImplBase):
    """Manage the custom command table (list / add / remove / run)."""

    command_name = "custom"
    command_aliases = ("cmd", "c", "cm")
    command_description = "Manage custom commands"
    usage = "custom {list|add|remove|run|help}"

    def invoke(self, call: CommandCall) -> None:
        if not call.args or call.args[0].lower() == "help":
            self._help(call)
            return

        sub, rest = call.args[0].lower(), call.args[1:]
        table = call.context.custom

        if sub == "list":
            self._list(call)
        elif sub == "add":
            if len(rest) < 2:
                raise self.usage_error()
            table.add(rest[0], " ".join(rest[1:]))
            call.reply(f"Added custom command: {rest[0]} -> {' '.join(rest[1:])}")
        elif sub in ("remove", "delete"):
            if not rest:
                raise self.usage_error()
            table.remove(rest[0])
            call.reply(f"Removed custom command: {rest[0]}")
        elif sub == "run":
            if not rest:
                raise self.usage_error()
            reply = table.get(rest[0])
            if reply is None:
                call.warn(f"Custom command '{rest[0]}' does not exist.")
                return
            call.context.world.chat(reply)
        else:
            call.warn(f"Unknown subcommand: {sub}")
            self._help(call)

    def _help(self, call: CommandCall) -> None:
        for line in HELP_LINES:
            call.reply(line)

    def _list(self, call: CommandCall) -> None:
        entries = call.context.custom.entries()
        if not entries:
            call.reply("No custom commands defined.")
            return
        if call.from_chat:
            call.reply("Custom: " + ", ".join(entries))
            return
        table = Table(title="Custom Commands")
        table.add_column("Trigger", style="bold")
        table.add_column("Reply")
        for trigger, reply in entries.items():
            table.add_row(trigger, reply)
        call.context.console.print(table)
