"""Public mode commands.

Replies from these commands are always posted to the whole channel.
"""

from typing import List

from .base import BaseCommand, CommandContext, Reply


def _format_mode(mode: bool) -> str:
    return "true" if mode else "false"


class SetPublicModeCommand(BaseCommand):
    """Turn public mode on or off."""

    name = "set_public"

    def __init__(self, mode: bool):
        self.mode = mode

    def execute(self, context: CommandContext) -> List[Reply]:
        context.repository.set_public_mode(context.channel, self.mode)
        return [Reply(f'Public mode was set as "{_format_mode(self.mode)}"', private=False)]


class GetPublicModeCommand(BaseCommand):
    """Show public mode."""

    name = "get_public"

    def execute(self, context: CommandContext) -> List[Reply]:
        mode = context.repository.get_public_mode(context.channel)
        return [Reply(f'Public mode is "{_format_mode(mode)}"', private=False)]
