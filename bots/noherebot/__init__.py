"""Slack bot that warns members who use @here or @channel without permission."""

__version__ = "1.0.0"
