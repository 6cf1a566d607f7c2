# src/commands/base/give.py

from typing import List, Tuple

from commands.registry import CommandCall, CommandImplBase
from llm_stack.items import canonical_item_name
from spec.types import ActionResult


def parse_count_and_item(args: List[str]) -> Tuple[int, str]:
    """['3', 'oak', 'log'] -> (3, 'oak_log'); a missing count means 1."""
    count = 1
    if args and args[0].isdigit():
        count = int(args[0])
        args = args[1:]
    name = canonical_item_name(" ".join(a.lower() for a in args)) or ""
    return max(1, count), name.replace(" ", "_")


async def give_and_report(call: CommandCall, username: str, count: int, item: str) -> ActionResult:
    result = await call.context.giver.give(username, item, count)
    if result.success:
        call.reply(f"Gave {result.details['given']}x {result.details['held_name']} to {username}")
    elif result.error == "recipient_not_visible":
        call.warn(f"Cannot give items: player {username} not found or not in range")
    elif result.error == "item_unavailable":
        call.warn(f"Cannot give items: {item} not found in inventory")
    else:
        call.warn(f"Cannot give items: {result.error} {result.details.get('distance', '')}".rstrip())
    return result


class GiveCommand(CommandImplBase):
    """Walk to a player and drop items for them."""

    command_name = "give"
    command_description = "Give items to players by dropping them"
    usage = "give <username> [count] <item>"

    async def invoke(self, call: CommandCall) -> ActionResult:
        if len(call.args) < 2:
            raise self.usage_error()
        username = call.args[0]
        count, item = parse_count_and_item(call.args[1:])
        if not item:
            raise self.usage_error()
        return await give_and_report(call, username, count, item)
