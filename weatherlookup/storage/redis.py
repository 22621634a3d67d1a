"""Redis-backed storage for sharing recent searches between machines."""

from typing import Optional

from weatherlookup.storage.base import RecentStorage
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="storage/redis_storage")


class RedisStorage(RecentStorage):
    """Store values as plain Redis strings under a key prefix."""

    def __init__(self, client, prefix: str = "weatherlookup:") -> None:
        """Initialize with a redis.Redis (or compatible) client."""
        logger.debug("Initializing RedisStorage")
        self.client = client
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def read(self, key: str) -> Optional[str]:
        raw = self.client.get(self._key(key))
        if raw is None:
            return None
        if isinstance(raw, bytes):
            return raw.decode("utf-8")
        return str(raw)

    def write(self, key: str, value: str) -> None:
        self.client.set(self._key(key), value.encode("utf-8"))

    def delete(self, key: str) -> None:
        self.client.delete(self._key(key))
