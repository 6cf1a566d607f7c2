# src/commands/base/antiafk.py

from bot_core.anti_afk import DEFAULT_INTERVAL_S
from commands.registry import CommandCall, CommandImplBase


class AntiAfkCommand(CommandImplBase):
    """
    `antiafk [seconds]` performs a random idle action every interval
    (default 30 s), replacing any running schedule; `antiafk off|stop` ends it.
    """

    command_name = "antiafk"
    command_aliases = ("afk", "noafk")
    command_description = "Toggle anti-AFK mode to prevent being kicked for inactivity"
    usage = "antiafk [seconds] | antiafk off"

    def invoke(self, call: CommandCall) -> bool:
        anti_afk = call.context.anti_afk
        arg = call.args[0].lower() if call.args else ""

        if arg in ("off", "stop"):
            if anti_afk.stop():
                call.reply("Anti-AFK mode disabled")
            else:
                call.reply("Anti-AFK mode was not active")
            return False

        interval_s = DEFAULT_INTERVAL_S
        if arg:
            try:
                interval_s = float(int(arg))
            except ValueError:
                raise self.usage_error() from None
            if interval_s <= 0:
                raise self.usage_error()

        anti_afk.start(interval_s)
        call.reply(f"Anti-AFK mode enabled (interval: {interval_s:g} seconds)")
        return True
