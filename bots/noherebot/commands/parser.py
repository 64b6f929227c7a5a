"""Recognizes and classifies bot-directed messages.

A message is directed at the bot when it starts or ends with the bot's
mention token (<@BOTID>), ignoring surrounding whitespace. The command body
is the message with whitespace and those mention tokens removed; it is then
classified by the default grammar below, first matching rule wins:

    help | usage                                   HelpCommand
    message <text>   (one pair of quotes stripped) SetMessageCommand
    message                                        GetMessageCommand
    grant|permit|allow|approve <mentions>          GrantCommand
    revoke|forbit|disallow|refuse all              RevokeAllCommand
    revoke|forbit|disallow|refuse <mentions>       RevokeCommand
    granted|permitted|allowed|approved             GrantedCommand
    public on|off|true|false                       SetPublicModeCommand
    public                                         GetPublicModeCommand
    test                                           TestCommand

Keywords are matched case-sensitively.
"""

import logging
import re
from typing import List, Optional

from ..formatters import format_mention
from .base import BaseCommand
from .member_commands import GrantCommand, GrantedCommand, RevokeAllCommand, RevokeCommand
from .message_commands import GetMessageCommand, SetMessageCommand, TestCommand
from .mode_commands import GetPublicModeCommand, SetPublicModeCommand
from .registry import CommandRegistry
from .system_commands import HelpCommand, InvalidCommand

logger = logging.getLogger(__name__)

MEMBER_PATTERN = r"<@[UW][0-9A-Z]+>"
MEMBERS_PATTERN = rf"{MEMBER_PATTERN}(?:\s*,?\s*{MEMBER_PATTERN})*"

GRANT_KEYWORDS = r"\b(?:grant|permit|allow|approve)"
REVOKE_KEYWORDS = r"\b(?:revoke|forbit|disallow|refuse)"


def extract_members(text: str) -> List[str]:
    """Extract member ids from a list of user mentions.

    Args:
        text: Mentions separated by whitespace and/or commas

    Returns:
        Member ids in order of appearance, without the <@ > wrapper
    """
    return [mention[2:-1] for mention in re.findall(MEMBER_PATTERN, text)]


def unquote(text: str) -> str:
    """Remove one pair of matching quotes around the whole text.

    Args:
        text: Possibly quoted text

    Returns:
        Text without the quotes, or the text unchanged if not quoted
    """
    match = re.fullmatch(r"([\"'])([\s\S]*)\1", text)
    return match.group(2) if match else text


def create_command_registry() -> CommandRegistry:
    """Build the default command grammar.

    Returns:
        CommandRegistry with all rules registered in precedence order
    """
    registry = CommandRegistry()

    registry.register("help", r"^(?:help|usage)\b", lambda m: HelpCommand())
    registry.register(
        "set_message",
        r"^message\s+([\s\S]+)$",
        lambda m: SetMessageCommand(unquote(m.group(1))),
    )
    registry.register("get_message", r"^message$", lambda m: GetMessageCommand())

    # Not anchored at the start: "please grant <@U1>" is a grant, but
    # keywords must start a word so "disallow" never reads as "allow".
    registry.register(
        "grant",
        rf"{GRANT_KEYWORDS}\s+({MEMBERS_PATTERN})$",
        lambda m: GrantCommand(extract_members(m.group(1))),
    )
    registry.register("revoke_all", rf"{REVOKE_KEYWORDS}\s+all\b", lambda m: RevokeAllCommand())
    registry.register(
        "revoke",
        rf"{REVOKE_KEYWORDS}\s+({MEMBERS_PATTERN})$",
        lambda m: RevokeCommand(extract_members(m.group(1))),
    )

    registry.register(
        "granted", r"^(?:granted|permitted|allowed|approved)$", lambda m: GrantedCommand()
    )
    registry.register(
        "set_public",
        r"^public\s+(on|off|true|false)$",
        lambda m: SetPublicModeCommand(m.group(1) in ("on", "true")),
    )
    registry.register("get_public", r"^public\s*$", lambda m: GetPublicModeCommand())
    registry.register("test", r"^test\s*$", lambda m: TestCommand())

    return registry


class CommandParser:
    """Turns message text into a command.

    Example:
        parser = CommandParser()
        command = parser.parse("<@U0BOT> message hello", "U0BOT")
        # SetMessageCommand(message='hello')
    """

    def __init__(self, registry: Optional[CommandRegistry] = None):
        """Initialize parser.

        Args:
            registry: Command grammar, the default grammar if omitted
        """
        self.registry = registry or create_command_registry()

    @staticmethod
    def _mention_pattern(bot_user_id: str) -> str:
        return re.escape(format_mention(bot_user_id))

    def is_directed(self, text: str, bot_user_id: str) -> bool:
        """Check whether text is addressed to the bot.

        Args:
            text: Message text
            bot_user_id: Member id of the bot

        Returns:
            True if the bot mention leads or trails the text
        """
        mention = self._mention_pattern(bot_user_id)
        return re.search(rf"(?:^\s*{mention}|{mention}\s*$)", text) is not None

    def extract_body(self, text: str, bot_user_id: str) -> str:
        """Remove surrounding whitespace and the leading/trailing bot mention.

        Args:
            text: Bot-directed message text
            bot_user_id: Member id of the bot

        Returns:
            Command body, empty for a bare mention
        """
        mention = self._mention_pattern(bot_user_id)
        return re.sub(rf"(?:^{mention}\s*|\s*{mention}$)", "", text.strip())

    def parse(self, text: str, bot_user_id: str) -> Optional[BaseCommand]:
        """Classify a message.

        Args:
            text: Message text
            bot_user_id: Member id of the bot

        Returns:
            None if the text is not directed at the bot, InvalidCommand for
            an empty or unrecognized body, otherwise the matching command
        """
        if not self.is_directed(text, bot_user_id):
            return None

        body = self.extract_body(text, bot_user_id)
        if body == "":
            return InvalidCommand()

        command = self.registry.resolve(body)
        logger.info(f"Parsed command: {command.name}")
        return command
