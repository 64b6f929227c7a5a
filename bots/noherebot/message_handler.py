"""Handles one inbound channel message.

MessageHandler is the inbound boundary of the bot core. For every message:

    1. Messages from ids that do not look like a channel or private group
       get the usage text, posted channel-wide, and nothing else.
    2. Messages without text are ignored.
    3. Bot-directed messages are parsed into a command and executed; its
       replies are posted in order.
    4. Any other message goes through the broadcast guard.

Replies leave through the post_reply callback given with each message.
Settings store failures propagate to the caller; replies already posted for
the message are not retracted.
"""

import logging
import re
from typing import TYPE_CHECKING, Optional

from .commands import CommandContext, CommandParser, Reply
from .formatters import build_usage
from .guard import BroadcastGuard

if TYPE_CHECKING:
    from .interfaces import ISettingRepository, PostReply

logger = logging.getLogger(__name__)

# Public channels start with C, private groups with G.
CHANNEL_ID_PATTERN = re.compile(r"^[CG]")


class MessageHandler:
    """Routes messages to the command system or the broadcast guard."""

    def __init__(
        self,
        repository: "ISettingRepository",
        parser: Optional[CommandParser] = None,
    ):
        """Initialize handler.

        Args:
            repository: Settings store shared by all channels
            parser: Command parser, the default grammar if omitted
        """
        self.repository = repository
        self.parser = parser or CommandParser()
        self.guard = BroadcastGuard(repository)

    @staticmethod
    def is_channel_valid(channel: str) -> bool:
        """Check whether channel looks like a channel or private group id.

        Args:
            channel: Channel identifier

        Returns:
            True for ids starting with C or G
        """
        return CHANNEL_ID_PATTERN.match(channel or "") is not None

    def handle(
        self,
        channel: str,
        sender: str,
        bot_user_id: str,
        text: Optional[str],
        post_reply: "PostReply",
    ) -> None:
        """Process one user message.

        Args:
            channel: Channel identifier the message was posted in
            sender: Member id of the author
            bot_user_id: Member id of the bot itself
            text: Message text, None for messages without text
            post_reply: Callback delivering each reply

        Returns:
            None

        Raises:
            StoreOperationError: If the settings store fails
        """
        if not self.is_channel_valid(channel):
            logger.warning(f"Message from unsupported channel {channel}, showing usage")
            post_reply(Reply(build_usage(bot_user_id), private=False))
            return

        if text is None:
            return

        command = self.parser.parse(text, bot_user_id)

        if command is None:
            warning = self.guard.check(channel, sender, text)
            if warning is not None:
                post_reply(warning)
            return

        context = CommandContext(
            repository=self.repository,
            channel=channel,
            sender=sender,
            bot_user_id=bot_user_id,
        )
        for reply in command.execute(context):
            post_reply(reply)
