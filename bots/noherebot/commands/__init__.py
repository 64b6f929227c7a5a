"""Command system for the no-here bot.

Bot-directed messages are classified by CommandParser into one command
instance per message. Each command inherits from BaseCommand and returns
the replies to post.

Example:
    from commands import CommandContext, CommandParser

    parser = CommandParser()
    command = parser.parse("<@U0BOT> grant <@U1> <@U2>", "U0BOT")
    replies = command.execute(CommandContext(repository, "C1", "U3", "U0BOT"))
"""

from .base import BaseCommand, CommandContext, Reply

# Allow-list commands
from .member_commands import GrantCommand, GrantedCommand, RevokeAllCommand, RevokeCommand

# Warning message commands
from .message_commands import GetMessageCommand, SetMessageCommand, TestCommand, build_warning

# Public mode commands
from .mode_commands import GetPublicModeCommand, SetPublicModeCommand
from .parser import CommandParser, create_command_registry
from .registry import CommandRegistry, CommandRule

# System commands
from .system_commands import HelpCommand, InvalidCommand

__all__ = [
    # Base classes
    "BaseCommand",
    "CommandContext",
    "Reply",
    # Parsing
    "CommandParser",
    "CommandRegistry",
    "CommandRule",
    "create_command_registry",
    # Warning message commands
    "SetMessageCommand",
    "GetMessageCommand",
    "TestCommand",
    "build_warning",
    # Allow-list commands
    "GrantCommand",
    "RevokeCommand",
    "RevokeAllCommand",
    "GrantedCommand",
    # Public mode commands
    "SetPublicModeCommand",
    "GetPublicModeCommand",
    # System commands
    "HelpCommand",
    "InvalidCommand",
]
