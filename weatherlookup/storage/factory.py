"""Pick the recent-search storage backend from configuration."""

try:
    import redis  # type: ignore
except ImportError:  # pragma: no cover - optional dependency
    redis = None

from weatherlookup import config
from weatherlookup.storage.base import RecentStorage
from weatherlookup.storage.file import FileStorage
from weatherlookup.storage.memory import InMemoryStorage
from weatherlookup.storage.redis import RedisStorage
from utils.logging_utils import get_tagged_logger, mask_url_credentials

logger = get_tagged_logger(__name__, tag="storage/factory")


def build_storage(settings: config.Settings | None = None) -> RecentStorage:
    """Instantiate the configured backend; Redis falls back to the file store when unavailable."""
    settings = settings or config.settings
    backend = settings.recent_store

    if backend == "memory":
        logger.info("Using InMemoryStorage for recent searches")
        return InMemoryStorage()

    if backend == "redis":
        if not settings.recent_redis_url:
            raise ValueError("recent_redis_url must be set for the redis recent store")
        masked = mask_url_credentials(settings.recent_redis_url)
        if redis is None:
            logger.warning("redis package not installed; falling back to FileStorage", extra={"redis_url": masked})
        else:
            try:
                client = redis.Redis.from_url(settings.recent_redis_url)
                client.ping()
                logger.info("Using RedisStorage for recent searches", extra={"redis_url": masked})
                return RedisStorage(client)
            except (redis.RedisError, ValueError) as exc:
                logger.warning("Falling back to FileStorage (Redis unavailable)",
                               extra={"redis_url": masked, "error": str(exc)})

    logger.info("Using FileStorage for recent searches", extra={"path": str(settings.recent_store_path)})
    return FileStorage(settings.recent_store_path)
