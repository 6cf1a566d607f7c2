# src/commands/base/aichat.py

from commands.registry import CommandCall, CommandImplBase


class AIChatCommand(CommandImplBase):
    """
    `aichat <api_key>` enables AI chat replies (key persisted to config);
    `aichat` reuses the stored key; `aichat off` disables.
    """

    command_name = "aichat"
    command_aliases = ("ai", "chatai")
    command_description = "Toggle AI chat responses to in-game messages"
    usage = "aichat <api_key> | aichat off"

    def invoke(self, call: CommandCall) -> bool:
        arg = call.args[0] if call.args else None
        if arg is not None and arg.lower() in ("off", "stop"):
            call.context.disable_ai_chat()
            call.reply("AI chat responses disabled")
            return False

        if not call.context.enable_ai_chat(arg):
            call.warn("Usage: aichat <api_key> - Enable AI chat responses")
            call.warn("Usage: aichat off - Disable AI chat responses")
            return False
        call.reply("AI chat responses enabled")
        return True
