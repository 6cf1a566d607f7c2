# src/commands/base/togglemsgs.py

from commands.registry import CommandCall, CommandImplBase


class ToggleMessagesCommand(CommandImplBase):
    command_name = "togglemsgs"
    command_aliases = ("messages", "msgs")
    command_description = "Toggle in-game message printing"

    def invoke(self, call: CommandCall) -> bool:
        router = call.context.router
        arg = call.args[0].lower() if call.args else ""
        if arg in ("on", "true"):
            enabled = True
        elif arg:
            enabled = False
        else:
            enabled = not router.show_chat
        router.show_chat = enabled
        call.context.config.set("logging.show_chat", enabled)
        call.reply(f"In-game message printing {'enabled' if enabled else 'disabled'}")
        return enabled
