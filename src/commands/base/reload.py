# src/commands/base/reload.py

from agent.config import ConfigError
from commands.registry import CommandCall, CommandImplBase


class ReloadCommand(CommandImplBase):
    """Re-read the config file and/or re-import the built-in commands."""

    command_name = "reload"
    command_aliases = ("refresh",)
    command_description = "Reload configuration and commands"
    usage = "reload [all|config|commands]"

    def invoke(self, call: CommandCall) -> None:
        targets = {a.lower() for a in call.args}
        reload_all = not targets or "all" in targets
        do_config = reload_all or "config" in targets
        do_commands = reload_all or "commands" in targets
        if not (do_config or do_commands):
            raise self.usage_error()

        if do_config:
            try:
                call.context.reload_config()
            except ConfigError as exc:
                call.warn(f"Config reload failed, keeping current settings: {exc}")
            else:
                call.reply("Configuration reloaded successfully")

        if do_commands:
            before = len(call.context.registry)
            after = call.context.reload_commands()
            added = after - before
            if added > 0:
                call.reply(f"Reloaded commands: {after} total ({added} new commands added)")
            else:
                call.reply(f"Reloaded {after} commands successfully")
