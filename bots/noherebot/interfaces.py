"""Interface definitions for the no-here bot.

Provides Protocol types for dependency injection and improved testability.
All interfaces use runtime_checkable for isinstance() checks.

Storage backends do not share a base class: any object providing the
ISettingRepository methods can be handed to the message handler.

Example:
    from noherebot.interfaces import ISettingRepository

    def is_allowed(repository: ISettingRepository, channel: str, user: str) -> bool:
        # Works with any backend
        return user in repository.get_members(channel)
"""

from typing import TYPE_CHECKING, Callable, List, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .commands.base import Reply


@runtime_checkable
class ISettingRepository(Protocol):
    """Per-channel settings storage.

    Holds the warning message, the allow-list and the public mode flag of
    every channel. Channels are created lazily: reading an untouched channel
    returns the defaults.
    """

    def get_message(self, channel: str) -> str:
        """Get the warning message of a channel.

        Args:
            channel: Channel identifier

        Returns:
            Stored message, or the default message if never set
        """
        ...

    def set_message(self, channel: str, message: str) -> None:
        """Overwrite the warning message of a channel.

        Args:
            channel: Channel identifier
            message: New message. An empty string is stored as is.

        Returns:
            None
        """
        ...

    def get_members(self, channel: str) -> List[str]:
        """Get members allowed to use broadcast mentions.

        Args:
            channel: Channel identifier

        Returns:
            List of member ids, empty if none granted
        """
        ...

    def grant_member(self, channel: str, member: str) -> None:
        """Add a member to the allow-list. Granting twice is a no-op.

        Args:
            channel: Channel identifier
            member: Member id to grant

        Returns:
            None
        """
        ...

    def revoke_member(self, channel: str, member: str) -> None:
        """Remove a member from the allow-list. Absent members are ignored.

        Args:
            channel: Channel identifier
            member: Member id to revoke

        Returns:
            None
        """
        ...

    def revoke_all(self, channel: str) -> None:
        """Clear the allow-list of a channel.

        Args:
            channel: Channel identifier

        Returns:
            None
        """
        ...

    def get_public_mode(self, channel: str) -> bool:
        """Get whether warnings are posted channel-wide.

        Args:
            channel: Channel identifier

        Returns:
            True if public mode is on, False by default
        """
        ...

    def set_public_mode(self, channel: str, mode: bool) -> None:
        """Set the public mode flag of a channel.

        Args:
            channel: Channel identifier
            mode: New public mode

        Returns:
            None
        """
        ...


# Outbound delivery of one reply. The caller maps Reply.private to an
# ephemeral or a channel-visible post.
PostReply = Callable[["Reply"], None]


@runtime_checkable
class IMessageHandler(Protocol):
    """Inbound boundary of the bot core."""

    def handle(
        self,
        channel: str,
        sender: str,
        bot_user_id: str,
        text: Optional[str],
        post_reply: PostReply,
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
        ...
