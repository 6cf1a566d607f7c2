# src/commands/base/help.py

from rich.table import Table

from commands.registry import CommandCall, CommandImplBase


class HelpCommand(CommandImplBase):
    """List built-in commands (with aliases) and custom triggers."""

    command_name = "help"
    command_aliases = ("?", "commands")
    command_description = "Shows available commands"

    def invoke(self, call: CommandCall) -> None:
        registry = call.context.registry
        custom = call.context.custom.entries()

        if call.from_chat:
            names = ", ".join(c.name for c in registry.commands())
            call.reply(f"Commands: {names}")
            return

        table = Table(title="Available Console Commands")
        table.add_column("Command", style="bold")
        table.add_column("Aliases")
        table.add_column("Description")
        for command in registry.commands():
            table.add_row(command.name, ", ".join(registry.aliases_of(command.name)), command.description)
        call.context.console.print(table)

        if custom:
            custom_table = Table(title="Custom Commands")
            custom_table.add_column("Trigger", style="bold")
            custom_table.add_column("Reply")
            for trigger, reply in custom.items():
                custom_table.add_row(trigger, reply)
            call.context.console.print(custom_table)
