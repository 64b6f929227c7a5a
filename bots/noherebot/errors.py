"""Exception types raised by the bot core."""


class NoHereBotError(Exception):
    """Base exception for bot errors."""

    pass


class StoreOperationError(NoHereBotError):
    """A settings store read or write failed.

    Raised by persistent backends when the underlying storage is unreachable
    or rejects a command. Never retried by the core.
    """

    pass


class ConfigError(NoHereBotError):
    """Configuration is missing or cannot be parsed."""

    pass
