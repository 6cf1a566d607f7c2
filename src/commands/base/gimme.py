# src/commands/base/gimme.py

from commands.errors import CommandError
from commands.registry import CommandCall, CommandImplBase
from spec.types import ActionResult

from .give import give_and_report, parse_count_and_item


class GimmeCommand(CommandImplBase):
    """
    `give` addressed to whoever asked.

    From game chat the recipient is the sender; from the console it is the
    configured `bot.owner`.
    """

    command_name = "gimme"
    command_description = "Give items to yourself"
    usage = "gimme [count] <item>"

    async def invoke(self, call: CommandCall) -> ActionResult:
        if not call.args:
            raise self.usage_error()

        recipient = call.sender or call.context.config.get("bot.owner")
        if not recipient:
            raise CommandError(
                "unavailable",
                "gimme needs a recipient: use it from game chat or set bot.owner",
            )

        count, item = parse_count_and_item(call.args)
        if not item:
            raise self.usage_error()
        return await give_and_report(call, recipient, count, item)
