"""Base classes for the command system.

This module provides the foundation for the command system: the reply
payload, the per-message execution context and the abstract command.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from ..interfaces import ISettingRepository


@dataclass
class Reply:
    """A message the bot sends back.

    Attributes:
        text: Message text
        private: True for an ephemeral reply visible only to the sender,
            False for a reply visible to the whole channel
    """

    text: str
    private: bool = False


class CommandContext:
    """Context passed to command execution.

    Encapsulates everything a command needs to handle one message, avoiding
    direct coupling to the Slack handler.

    Attributes:
        repository: Settings store for the channel
        channel: Channel the command was posted in
        sender: Member id of the command author
        bot_user_id: Member id of the bot
    """

    def __init__(
        self,
        repository: "ISettingRepository",
        channel: str,
        sender: str,
        bot_user_id: str,
    ):
        """Initialize command context.

        Args:
            repository: Settings store for the channel
            channel: Channel the command was posted in
            sender: Member id of the command author
            bot_user_id: Member id of the bot
        """
        self.repository = repository
        self.channel = channel
        self.sender = sender
        self.bot_user_id = bot_user_id


class BaseCommand(ABC):
    """Abstract base class for all commands.

    A command instance is one classified message: it carries the arguments
    extracted by the parser and lives only while that message is handled.

    Example:
        class GetMessageCommand(BaseCommand):
            name = "get_message"

            def execute(self, context: CommandContext) -> List[Reply]:
                message = context.repository.get_message(context.channel)
                return [Reply(f'Warning message is "{message}"', private=True)]
    """

    name: str = ""

    @abstractmethod
    def execute(self, context: CommandContext) -> List[Reply]:
        """Execute the command.

        Args:
            context: Execution context with all dependencies

        Returns:
            Replies to post, in order

        Raises:
            StoreOperationError: If the settings store fails
        """
        pass

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and vars(self) == vars(other)

    def __repr__(self) -> str:
        args = ", ".join(f"{key}={value!r}" for key, value in vars(self).items())
        return f"{type(self).__name__}({args})"
