"""Help and invalid-command handling."""

from typing import List

from ..formatters import build_usage
from .base import BaseCommand, CommandContext, Reply


class HelpCommand(BaseCommand):
    """Show usage text to the whole channel."""

    name = "help"

    def execute(self, context: CommandContext) -> List[Reply]:
        return [Reply(build_usage(context.bot_user_id), private=False)]


class InvalidCommand(BaseCommand):
    """Command text that matched no rule, or an empty command.

    Posts a channel-visible notice, then the usage text to the sender only.
    """

    name = "invalid"

    def execute(self, context: CommandContext) -> List[Reply]:
        return [
            Reply("Invalid command"),
            Reply(build_usage(context.bot_user_id), private=True),
        ]
