"""Slack text formatting helpers.

Builds user mentions and the usage text. Literal `@here` / `@channel`
in help output carry a zero-width space after the '@' so that posting the
help never notifies the channel.
"""

from typing import Iterable

ZERO_WIDTH_SPACE = "\u200b"

HERE = f"`@{ZERO_WIDTH_SPACE}here`"
CHANNEL = f"`@{ZERO_WIDTH_SPACE}channel`"
USER = f"`@{ZERO_WIDTH_SPACE}user`"
OTHERS = f"`@{ZERO_WIDTH_SPACE}others`"


def format_mention(member: str) -> str:
    """Format a member id as a Slack user mention.

    Args:
        member: Member id, e.g. U012AB3CD

    Returns:
        Mention token, e.g. <@U012AB3CD>
    """
    return f"<@{member}>"


def format_mentions(members: Iterable[str]) -> str:
    """Format member ids as space separated mentions."""
    return " ".join(format_mention(member) for member in members)


def build_usage(bot_user_id: str) -> str:
    """Build the usage text shown for help and invalid commands.

    Args:
        bot_user_id: Member id of the bot, used in every example line

    Returns:
        Multi-line usage text
    """
    bot = format_mention(bot_user_id)
    lines = [
        f"{bot}: bot which warns when somebody uses {HERE} / {CHANNEL}",
        "",
        "usage",
        f"  {bot} message <message>",
        "    Set warning message",
        f'  {bot} message ""',
        "    Reset warning message",
        f"  {bot} message",
        "    Show warning message",
        f"  {bot} grant {USER} [{OTHERS} ...]",
        f"    Grant user to use {HERE} / {CHANNEL}",
        f"  {bot} revoke {USER} [{OTHERS} ...]",
        f"    Revoke user from using {HERE} / {CHANNEL}",
        f"  {bot} revoke all",
        "    Revoke all users",
        f"  {bot} granted",
        "    Show granted users",
        f"  {bot} public (on|off) (default: off)",
        "    Set public mode.  If public mode is on, warning message will be posted globally.",
        f"  {bot} public",
        "    Show public mode",
        f"  {bot} test",
        "    Test warning message",
        f"  {bot} help",
        "    Show this help message",
    ]
    return "\n".join(lines)
