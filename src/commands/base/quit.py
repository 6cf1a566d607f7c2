# src/commands/base/quit.py

from commands.registry import CommandCall, CommandImplBase


class QuitCommand(CommandImplBase):
    command_name = "quit"
    command_aliases = ("exit",)
    command_description = "Shutdown the bot"

    def invoke(self, call: CommandCall) -> None:
        call.context.request_quit()
