# src/commands/base/debug.py

from agent.logging_config import is_debug, set_debug
from commands.registry import CommandCall, CommandImplBase


class DebugCommand(CommandImplBase):
    command_name = "debug"
    command_aliases = ("verbose",)
    command_description = "Toggle debug mode"

    def invoke(self, call: CommandCall) -> bool:
        arg = call.args[0].lower() if call.args else ""
        if arg in ("on", "true"):
            enabled = True
        elif arg in ("off", "false"):
            enabled = False
        else:
            enabled = not is_debug()
        set_debug(enabled)
        call.reply(f"Debug mode {'enabled' if enabled else 'disabled'}")
        return enabled
