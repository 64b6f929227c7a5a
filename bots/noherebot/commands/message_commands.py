"""Warning message commands.

Commands for setting, showing and previewing the channel's warning message.
"""

from typing import TYPE_CHECKING, List

from .base import BaseCommand, CommandContext, Reply

if TYPE_CHECKING:
    from ..interfaces import ISettingRepository


def build_warning(repository: "ISettingRepository", channel: str) -> Reply:
    """Build the warning posted when a broadcast mention is caught.

    The warning is private unless the channel is in public mode.

    Args:
        repository: Settings store
        channel: Channel the warning is for

    Returns:
        Warning reply
    """
    is_public = repository.get_public_mode(channel)
    return Reply(repository.get_message(channel), private=not is_public)


class SetMessageCommand(BaseCommand):
    """Set the warning message."""

    name = "set_message"

    def __init__(self, message: str):
        """Initialize with the new message.

        Args:
            message: Message text with surrounding quotes already removed.
                An empty string is a valid message.
        """
        self.message = message

    def execute(self, context: CommandContext) -> List[Reply]:
        context.repository.set_message(context.channel, self.message)
        return [Reply(f'Warning message was set as "{self.message}"', private=True)]


class GetMessageCommand(BaseCommand):
    """Show the warning message."""

    name = "get_message"

    def execute(self, context: CommandContext) -> List[Reply]:
        message = context.repository.get_message(context.channel)
        return [Reply(f'Warning message is "{message}"', private=True)]


class TestCommand(BaseCommand):
    """Post the warning exactly as a caught broadcast mention would."""

    name = "test"

    def execute(self, context: CommandContext) -> List[Reply]:
        return [build_warning(context.repository, context.channel)]
