"""Catches broadcast mentions from members not on the allow-list."""

import logging
import re
from typing import TYPE_CHECKING, Optional

from .commands.base import Reply
from .commands.message_commands import build_warning
from .utils.security import hash_user_id

if TYPE_CHECKING:
    from .interfaces import ISettingRepository

logger = logging.getLogger(__name__)

BROADCAST_MARKER_PATTERN = re.compile(r"<!(?:here|channel)>")


class BroadcastGuard:
    """Decides whether an ordinary message deserves a warning."""

    def __init__(self, repository: "ISettingRepository"):
        """Initialize guard.

        Args:
            repository: Settings store holding allow-lists and messages
        """
        self.repository = repository

    @staticmethod
    def contains_marker(text: str) -> bool:
        """Check for <!here> or <!channel> in text."""
        return BROADCAST_MARKER_PATTERN.search(text) is not None

    def is_sender_allowed(self, channel: str, sender: str) -> bool:
        """Check whether sender is on the channel's allow-list.

        Args:
            channel: Channel identifier
            sender: Member id of the author

        Returns:
            True if the sender was granted
        """
        return sender in self.repository.get_members(channel)

    def check(self, channel: str, sender: str, text: Optional[str]) -> Optional[Reply]:
        """Inspect a message that is not directed at the bot.

        Args:
            channel: Channel identifier
            sender: Member id of the author
            text: Message text, may be None

        Returns:
            Warning reply, or None when no warning is due

        Raises:
            StoreOperationError: If the settings store fails
        """
        if text is None or not self.contains_marker(text):
            return None

        if self.is_sender_allowed(channel, sender):
            logger.info(f"Broadcast mention by granted member {hash_user_id(sender)} in {channel}")
            return None

        logger.info(f"Warning member {hash_user_id(sender)} for broadcast mention in {channel}")
        return build_warning(self.repository, channel)
