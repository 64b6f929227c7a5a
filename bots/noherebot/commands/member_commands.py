"""Allow-list commands.

Commands for granting and revoking members' right to use broadcast mentions.

Grant and revoke apply members one at a time, in the order they were
listed, each store call completing before the next starts. The store is not
transactional across calls, so this ordering is what makes the final
allow-list deterministic. A failing call raises and the remaining members
are not applied; members handled before the failure stay applied.
"""

import logging
from typing import List

from ..formatters import format_mentions
from .base import BaseCommand, CommandContext, Reply

logger = logging.getLogger(__name__)


class GrantCommand(BaseCommand):
    """Allow members to use broadcast mentions."""

    name = "grant"

    def __init__(self, members: List[str]):
        """Initialize with the members to grant.

        Args:
            members: Member ids in the order they were mentioned
        """
        self.members = members

    def execute(self, context: CommandContext) -> List[Reply]:
        """Handle grant @user [@others ...].

        Args:
            context: Command execution context

        Returns:
            Private confirmation listing the granted members

        Raises:
            StoreOperationError: On the first failing grant
        """
        for member in self.members:
            context.repository.grant_member(context.channel, member)

        logger.info(f"Granted {len(self.members)} member(s) in {context.channel}")
        return [
            Reply(f"Following users were granted: {format_mentions(self.members)}", private=True)
        ]


class RevokeCommand(BaseCommand):
    """Remove members from the allow-list."""

    name = "revoke"

    def __init__(self, members: List[str]):
        """Initialize with the members to revoke.

        Args:
            members: Member ids in the order they were mentioned
        """
        self.members = members

    def execute(self, context: CommandContext) -> List[Reply]:
        """Handle revoke @user [@others ...].

        Args:
            context: Command execution context

        Returns:
            Private confirmation listing the revoked members

        Raises:
            StoreOperationError: On the first failing revoke
        """
        for member in self.members:
            context.repository.revoke_member(context.channel, member)

        logger.info(f"Revoked {len(self.members)} member(s) in {context.channel}")
        return [
            Reply(f"Following users were revoked: {format_mentions(self.members)}", private=True)
        ]


class RevokeAllCommand(BaseCommand):
    """Clear the allow-list."""

    name = "revoke_all"

    def execute(self, context: CommandContext) -> List[Reply]:
        context.repository.revoke_all(context.channel)
        logger.info(f"Revoked all members in {context.channel}")
        return [Reply("All users were revoked", private=True)]


class GrantedCommand(BaseCommand):
    """Show the allow-list."""

    name = "granted"

    def execute(self, context: CommandContext) -> List[Reply]:
        members = context.repository.get_members(context.channel)

        if not members:
            return [Reply("No user granted", private=True)]

        return [Reply(f"Following users are granted: {format_mentions(members)}", private=True)]
