# src/commands/base/say.py

from commands.registry import CommandCall, CommandImplBase


class SayCommand(CommandImplBase):
    command_name = "say"
    command_aliases = ("chat", "msg")
    command_description = "Send a chat message"
    usage = "say <message>"

    def invoke(self, call: CommandCall) -> None:
        message = " ".join(call.args)
        if not message:
            raise self.usage_error()
        call.context.world.chat(message)
        if not call.from_chat:
            call.reply(f"Sent message: {message}")
