# src/commands/base/follow.py

from commands.registry import CommandCall, CommandImplBase
from spec.types import ActionResult


class FollowCommand(CommandImplBase):
    """`follow <name>` starts a follow session; `follow stop|off` ends it."""

    command_name = "follow"
    command_aliases = ("followplayer",)
    command_description = "Follow a player"
    usage = "follow <username> | follow stop"

    def invoke(self, call: CommandCall) -> ActionResult:
        movement = call.context.movement

        if call.args and call.args[0].lower() in ("stop", "off"):
            result = movement.stop()
            if result.details["was_active"]:
                call.reply(f"Stopped following {result.details['target']}")
            else:
                call.reply("Follow was not active")
            return result
        if not call.args:
            raise self.usage_error()

        username = call.args[0]
        result = movement.follow(username)
        if result.success:
            call.reply(f"Now following {username} at distance {result.details['distance']}")
        elif result.error == "pathfinder_unavailable":
            call.warn("Cannot follow player: pathfinder not available")
        else:
            call.warn(f"Cannot follow player: {username} not found or not in range")
        return result
