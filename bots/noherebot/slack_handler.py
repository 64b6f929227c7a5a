"""Handles Slack API interactions."""

import logging
from typing import Any, Callable, Dict, Optional

from slack_bolt import App
from slack_bolt.adapter.socket_mode import SocketModeHandler

from .commands import Reply
from .config import BotConfig
from .interfaces import IMessageHandler
from .utils.security import filter_sensitive_content, hash_user_id

logger = logging.getLogger(__name__)

# Subtypes that are not a member posting text. Others (thread_broadcast,
# file_share, me_message, ...) are user messages and go through the guard.
IGNORED_SUBTYPES = {
    "bot_message",
    "channel_archive",
    "channel_join",
    "channel_leave",
    "channel_name",
    "channel_purpose",
    "channel_topic",
    "channel_unarchive",
    "ekm_access_denied",
    "group_archive",
    "group_join",
    "group_leave",
    "group_name",
    "group_purpose",
    "group_topic",
    "group_unarchive",
    "message_changed",
    "message_deleted",
    "message_replied",
    "pinned_item",
    "unpinned_item",
}


class SlackHandler:
    """Manages the Slack connection and forwards user messages to the core."""

    def __init__(
        self,
        config: BotConfig,
        message_handler: IMessageHandler,
        app: Optional[App] = None,
    ):
        """Initialize Slack handler.

        Args:
            config: Bot configuration
            message_handler: Core handler receiving user messages
            app: Bolt app, created from the bot token if omitted
        """
        self.config = config
        self.message_handler = message_handler
        self.app = app or App(token=config.slack_bot_token)
        self.ignored_users = set(config.ignored_users)

        # Get bot's own user id
        result = self.app.client.auth_test()
        self.bot_user_id: str = result["user_id"]
        logger.info(f"Bot user id: {self.bot_user_id}")

        self._register_listeners()

    def _register_listeners(self) -> None:
        """Subscribe to message events."""

        @self.app.event("message")
        def on_message(event: Dict[str, Any]) -> None:
            self.handle_event(event)

    def should_ignore(self, event: Dict[str, Any]) -> bool:
        """Check whether an event is something other than a user message.

        Hidden events, system subtypes listed in IGNORED_SUBTYPES, and
        messages from the bot itself or from an ignored user are skipped.

        Args:
            event: Slack message event

        Returns:
            True if the event must not reach the core
        """
        if event.get("type") != "message":
            return True
        if event.get("hidden"):
            return True
        if event.get("subtype") in IGNORED_SUBTYPES:
            return True

        user = event.get("user")
        return user is None or user == self.bot_user_id or user in self.ignored_users

    def make_post_reply(self, channel: str, user: str) -> Callable[[Reply], None]:
        """Build the reply callback for one message.

        Args:
            channel: Channel the message was posted in
            user: Author of the message, recipient of ephemeral replies

        Returns:
            Callback posting a Reply ephemerally or to the channel
        """

        def post_reply(reply: Reply) -> None:
            if reply.private:
                self.app.client.chat_postEphemeral(
                    channel=channel, user=user, text=reply.text, link_names=True
                )
            else:
                self.app.client.chat_postMessage(channel=channel, text=reply.text, link_names=True)

        return post_reply

    def handle_event(self, event: Dict[str, Any]) -> None:
        """Process incoming message event.

        Errors are logged and swallowed so one failing message does not stop
        the event loop.

        Args:
            event: Slack message event

        Returns:
            None
        """
        if self.should_ignore(event):
            logger.debug(f"Ignoring event: subtype={event.get('subtype')}")
            return

        channel = event.get("channel", "")
        user = event["user"]
        text = event.get("text")

        logger.info(f"=== RECEIVED MESSAGE === Channel: {channel}, From: {hash_user_id(user)}")
        logger.debug(f"Message content preview: {filter_sensitive_content((text or '')[:100])}")

        try:
            self.message_handler.handle(
                channel, user, self.bot_user_id, text, self.make_post_reply(channel, user)
            )
        except Exception as e:
            logger.error(f"Failed to handle message event: {e}", exc_info=True)

    def start(self) -> None:
        """Start listening to messages over Socket Mode.

        Returns:
            None
        """
        logger.info("Starting Socket Mode listener...")
        SocketModeHandler(self.app, self.config.slack_app_token).start()
