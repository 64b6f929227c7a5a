"""Settings storage backends.

Two backends implement ISettingRepository:

    MemorySettingRepository: process-local dictionaries, lost on restart.
    RedisSettingRepository: one Redis key per channel and field, shared by
        every bot process pointed at the same server.

Redis key layout:
    <channel>:msg       string, the warning message
    <channel>:members   set of member ids
    <channel>:public    "true" or "false"

The backend is chosen once at start-up by create_repository().
"""

import contextlib
import logging
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional

import redis

from .errors import StoreOperationError
from .utils.security import redact_url

if TYPE_CHECKING:
    from .config import BotConfig
    from .interfaces import ISettingRepository

logger = logging.getLogger(__name__)

DEFAULT_WARNING_MESSAGE = "Do not use either <!here> or <!channel> here."


class MemorySettingRepository:
    """Keeps channel settings in process memory.

    Single-threaded access is assumed; no locking is done.
    """

    def __init__(self, default_message: str = DEFAULT_WARNING_MESSAGE):
        """Initialize an empty store.

        Args:
            default_message: Message returned for channels without one
        """
        self.default_message = default_message
        self._store: Dict[str, Dict[str, Any]] = {}

    def _get_store(self, channel: str) -> Dict[str, Any]:
        """Get the settings dict of a channel, creating it on first access."""
        return self._store.setdefault(channel, {})

    def get_message(self, channel: str) -> str:
        store = self._get_store(channel)
        return store.get("message", self.default_message)

    def set_message(self, channel: str, message: str) -> None:
        self._get_store(channel)["message"] = message

    def get_members(self, channel: str) -> List[str]:
        store = self._get_store(channel)
        return list(store.setdefault("members", []))

    def grant_member(self, channel: str, member: str) -> None:
        self.revoke_member(channel, member)
        self._get_store(channel)["members"].append(member)

    def revoke_member(self, channel: str, member: str) -> None:
        store = self._get_store(channel)
        store["members"] = [m for m in store.get("members", []) if m != member]

    def revoke_all(self, channel: str) -> None:
        self._get_store(channel)["members"] = []

    def get_public_mode(self, channel: str) -> bool:
        return self._get_store(channel).get("public", False)

    def set_public_mode(self, channel: str, mode: bool) -> None:
        self._get_store(channel)["public"] = mode


class RedisSettingRepository:
    """Keeps channel settings in Redis.

    Each call is a single Redis command, so per-key atomicity is all this
    backend relies on. Redis errors are re-raised as StoreOperationError.
    """

    def __init__(self, client: redis.Redis, default_message: str = DEFAULT_WARNING_MESSAGE):
        """Initialize with a Redis client.

        Args:
            client: Redis client created with decode_responses=True
            default_message: Message returned for channels without one
        """
        self.client = client
        self.default_message = default_message

    @classmethod
    def from_url(
        cls, url: str, default_message: str = DEFAULT_WARNING_MESSAGE
    ) -> "RedisSettingRepository":
        """Create a repository connected to a Redis URL.

        Args:
            url: Connection URL, e.g. redis://localhost:6379/0
            default_message: Message returned for channels without one

        Returns:
            RedisSettingRepository instance
        """
        client = redis.Redis.from_url(url, decode_responses=True)
        return cls(client, default_message=default_message)

    @staticmethod
    def _key(channel: str, field: str) -> str:
        return f"{channel}:{field}"

    @contextlib.contextmanager
    def _operation(self, name: str, channel: str) -> Iterator[None]:
        """Translate Redis failures into StoreOperationError.

        Args:
            name: Operation name used in the error message
            channel: Channel the operation applies to

        Raises:
            StoreOperationError: If the wrapped Redis call fails
        """
        try:
            yield
        except redis.exceptions.RedisError as e:
            logger.error(f"Redis {name} failed for channel {channel}: {e}")
            raise StoreOperationError(f"{name} failed for channel {channel}: {e}") from e

    def get_message(self, channel: str) -> str:
        with self._operation("get_message", channel):
            message: Optional[str] = self.client.get(self._key(channel, "msg"))
        return message if message is not None else self.default_message

    def set_message(self, channel: str, message: str) -> None:
        with self._operation("set_message", channel):
            self.client.set(self._key(channel, "msg"), message)

    def get_members(self, channel: str) -> List[str]:
        """Get granted members, sorted since Redis sets are unordered."""
        with self._operation("get_members", channel):
            members = self.client.smembers(self._key(channel, "members"))
        return sorted(members or [])

    def grant_member(self, channel: str, member: str) -> None:
        with self._operation("grant_member", channel):
            self.client.sadd(self._key(channel, "members"), member)

    def revoke_member(self, channel: str, member: str) -> None:
        with self._operation("revoke_member", channel):
            self.client.srem(self._key(channel, "members"), member)

    def revoke_all(self, channel: str) -> None:
        with self._operation("revoke_all", channel):
            self.client.delete(self._key(channel, "members"))

    def get_public_mode(self, channel: str) -> bool:
        with self._operation("get_public_mode", channel):
            mode: Optional[str] = self.client.get(self._key(channel, "public"))
        return mode == "true"

    def set_public_mode(self, channel: str, mode: bool) -> None:
        with self._operation("set_public_mode", channel):
            self.client.set(self._key(channel, "public"), "true" if mode else "false")


def create_repository(config: "BotConfig") -> "ISettingRepository":
    """Select the settings backend for this process.

    Args:
        config: Loaded bot configuration

    Returns:
        RedisSettingRepository if a Redis URL is configured,
        MemorySettingRepository otherwise
    """
    if config.redis_url:
        logger.info(f"Using Redis settings store at {redact_url(config.redis_url)}")
        return RedisSettingRepository.from_url(
            config.redis_url, default_message=config.default_warning_message
        )

    logger.info("REDIS_URL not set, using in-memory settings store (not persisted)")
    return MemorySettingRepository(default_message=config.default_warning_message)
