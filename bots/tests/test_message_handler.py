"""Tests for message handling end to end: parsing, dispatch and the guard."""

import unittest
from typing import List
from unittest.mock import Mock

from noherebot.commands import Reply
from noherebot.errors import StoreOperationError
from noherebot.formatters import build_usage
from noherebot.message_handler import MessageHandler
from noherebot.repositories import DEFAULT_WARNING_MESSAGE, MemorySettingRepository

BOT = "UBOT"
CHANNEL = "C0GENERAL"
SENDER = "U0SENDER"


class MessageHandlerTestCase(unittest.TestCase):
    """Shared fixtures: a memory store and a reply recorder."""

    def setUp(self):
        """Set up test fixtures."""
        self.repository = MemorySettingRepository()
        self.handler = MessageHandler(self.repository)
        self.replies: List[Reply] = []

    def send(self, text, channel: str = CHANNEL, sender: str = SENDER) -> List[Reply]:
        self.replies = []
        self.handler.handle(channel, sender, BOT, text, self.replies.append)
        return self.replies


class TestCommands(MessageHandlerTestCase):
    """Tests for command dispatch."""

    def test_help(self):
        """help posts usage channel-wide."""
        self.assertEqual(self.send("<@UBOT> help"), [Reply(build_usage(BOT), private=False)])

    def test_set_message(self):
        """message <text> stores and confirms privately."""
        replies = self.send("<@UBOT> message hello world")

        self.assertEqual(self.repository.get_message(CHANNEL), "hello world")
        self.assertEqual(len(replies), 1)
        self.assertIn("hello world", replies[0].text)
        self.assertTrue(replies[0].private)
        self.assertEqual(replies[0].text, 'Warning message was set as "hello world"')

    def test_reset_message(self):
        """message "" stores an empty message."""
        self.send('<@UBOT> message ""')
        self.assertEqual(self.repository.get_message(CHANNEL), "")

    def test_get_message(self):
        """message shows the current message privately."""
        replies = self.send("<@UBOT> message")
        self.assertEqual(
            replies, [Reply(f'Warning message is "{DEFAULT_WARNING_MESSAGE}"', private=True)]
        )

    def test_grant(self):
        """grant adds members in order and lists them."""
        replies = self.send("<@UBOT> grant <@U1> <@U2>")

        self.assertEqual(self.repository.get_members(CHANNEL), ["U1", "U2"])
        self.assertEqual(
            replies, [Reply("Following users were granted: <@U1> <@U2>", private=True)]
        )

    def test_revoke(self):
        """revoke removes members and lists them."""
        self.send("<@UBOT> grant <@U1> <@U2> <@U3>")
        replies = self.send("<@UBOT> revoke <@U1>, <@U3>")

        self.assertEqual(self.repository.get_members(CHANNEL), ["U2"])
        self.assertEqual(
            replies, [Reply("Following users were revoked: <@U1> <@U3>", private=True)]
        )

    def test_disallow_revokes(self):
        """disallow removes members instead of granting them."""
        self.send("<@UBOT> grant <@U1>")
        replies = self.send("<@UBOT> disallow <@U1>")

        self.assertEqual(self.repository.get_members(CHANNEL), [])
        self.assertEqual(replies, [Reply("Following users were revoked: <@U1>", private=True)])

    def test_revoke_all(self):
        """revoke all clears the allow-list."""
        self.send("<@UBOT> grant <@U1> <@U2>")
        replies = self.send("<@UBOT> revoke all")

        self.assertEqual(self.repository.get_members(CHANNEL), [])
        self.assertEqual(replies, [Reply("All users were revoked", private=True)])

    def test_granted_empty(self):
        """granted with nobody granted."""
        self.assertEqual(self.send("<@UBOT> granted"), [Reply("No user granted", private=True)])

    def test_granted_lists_members(self):
        """granted lists the allow-list."""
        self.send("<@UBOT> grant <@U1> <@U2>")
        self.assertEqual(
            self.send("<@UBOT> granted"),
            [Reply("Following users are granted: <@U1> <@U2>", private=True)],
        )

    def test_public_mode(self):
        """public commands reply channel-wide."""
        self.assertEqual(
            self.send("<@UBOT> public on"), [Reply('Public mode was set as "true"', private=False)]
        )
        self.assertTrue(self.repository.get_public_mode(CHANNEL))
        self.assertEqual(
            self.send("<@UBOT> public"), [Reply('Public mode is "true"', private=False)]
        )

        self.send("<@UBOT> public off")
        self.assertEqual(
            self.send("<@UBOT> public"), [Reply('Public mode is "false"', private=False)]
        )

    def test_test_mirrors_public_mode(self):
        """test posts the warning, private unless public mode is on."""
        self.repository.set_message(CHANNEL, "stop it")
        self.assertEqual(self.send("<@UBOT> test"), [Reply("stop it", private=True)])

        self.repository.set_public_mode(CHANNEL, True)
        self.assertEqual(self.send("<@UBOT> test"), [Reply("stop it", private=False)])

    def test_bare_mention_is_invalid(self):
        """A bare mention posts 'Invalid command' then private usage."""
        replies = self.send("<@UBOT>   ")
        self.assertEqual(
            replies,
            [Reply("Invalid command", private=False), Reply(build_usage(BOT), private=True)],
        )

    def test_unknown_command(self):
        """Unknown commands behave like a bare mention."""
        replies = self.send("<@UBOT> dance")
        self.assertEqual([r.text for r in replies], ["Invalid command", build_usage(BOT)])

    def test_command_with_marker_is_not_warned(self):
        """Bot-directed text is never checked for broadcast markers."""
        replies = self.send("<@UBOT> message <!here> is banned")
        self.assertEqual(self.repository.get_message(CHANNEL), "<!here> is banned")
        self.assertEqual(len(replies), 1)


class TestBroadcastGuard(MessageHandlerTestCase):
    """Tests for warnings on broadcast mentions."""

    def test_warns_private_by_default(self):
        """A non-granted sender gets one private warning."""
        self.assertEqual(
            self.send("<!here> lunch?"), [Reply(DEFAULT_WARNING_MESSAGE, private=True)]
        )

    def test_warns_for_channel_marker(self):
        """<!channel> is caught as well."""
        self.assertEqual(len(self.send("hey <!channel>")), 1)

    def test_warns_publicly_in_public_mode(self):
        """In public mode the warning is channel-wide."""
        self.repository.set_public_mode(CHANNEL, True)
        self.repository.set_message(CHANNEL, "no")
        self.assertEqual(self.send("<!here>"), [Reply("no", private=False)])

    def test_granted_sender_is_silent(self):
        """Granted senders may use broadcast mentions."""
        self.repository.grant_member(CHANNEL, SENDER)
        self.assertEqual(self.send("<!here> deploy done"), [])

    def test_grant_is_per_channel(self):
        """A grant in one channel does not apply to another."""
        self.repository.grant_member("C0OTHER", SENDER)
        self.assertEqual(len(self.send("<!here>")), 1)

    def test_no_marker_is_silent(self):
        """Ordinary messages get no reply."""
        self.assertEqual(self.send("good morning"), [])

    def test_missing_text_is_silent(self):
        """Messages without text get no reply."""
        self.assertEqual(self.send(None), [])

    def test_revoked_sender_is_warned_again(self):
        """Revoking restores the warning."""
        self.send(f"<@UBOT> grant <@{SENDER}>")
        self.assertEqual(self.send("<!here>"), [])
        self.send(f"<@UBOT> revoke <@{SENDER}>")
        self.assertEqual(len(self.send("<!here>")), 1)


class TestChannelValidation(MessageHandlerTestCase):
    """Tests for messages outside channels and private groups."""

    def test_private_group_is_valid(self):
        """G-prefixed ids are private groups and get warnings."""
        self.assertEqual(len(self.send("<!here>", channel="G0PRIVATE")), 1)

    def test_direct_message_shows_usage(self):
        """D-prefixed ids only get public usage."""
        replies = self.send("<!here>", channel="D0DIRECT")
        self.assertEqual(replies, [Reply(build_usage(BOT), private=False)])

    def test_invalid_channel_checked_before_text(self):
        """Usage is shown even when the message has no text."""
        self.assertEqual(len(self.send(None, channel="D0DIRECT")), 1)

    def test_invalid_channel_skips_commands(self):
        """Commands are not executed outside channels."""
        self.send("<@UBOT> message changed", channel="D0DIRECT")
        self.assertEqual(self.repository.get_message("D0DIRECT"), DEFAULT_WARNING_MESSAGE)


class TestStoreFailures(unittest.TestCase):
    """Tests for settings store failures."""

    def setUp(self):
        """Set up test fixtures."""
        self.repository = Mock()
        self.handler = MessageHandler(self.repository)
        self.post_reply = Mock()

    def test_grant_stops_at_first_failure(self):
        """A failing grant aborts the batch and posts nothing."""
        self.repository.grant_member.side_effect = [None, StoreOperationError("down"), None]

        with self.assertRaises(StoreOperationError):
            self.handler.handle(
                CHANNEL, SENDER, BOT, "<@UBOT> grant <@U1> <@U2> <@U3>", self.post_reply
            )

        self.assertEqual(
            [c.args for c in self.repository.grant_member.call_args_list],
            [(CHANNEL, "U1"), (CHANNEL, "U2")],
        )
        self.post_reply.assert_not_called()

    def test_revoke_applies_in_order(self):
        """Revokes are applied one by one in listed order."""
        self.handler.handle(CHANNEL, SENDER, BOT, "<@UBOT> revoke <@U3> <@U1>", self.post_reply)

        self.assertEqual(
            [c.args for c in self.repository.revoke_member.call_args_list],
            [(CHANNEL, "U3"), (CHANNEL, "U1")],
        )

    def test_guard_failure_propagates(self):
        """Store failures while checking a broadcast mention propagate."""
        self.repository.get_members.side_effect = StoreOperationError("down")

        with self.assertRaises(StoreOperationError):
            self.handler.handle(CHANNEL, SENDER, BOT, "<!here>", self.post_reply)

        self.post_reply.assert_not_called()


if __name__ == "__main__":
    unittest.main()
