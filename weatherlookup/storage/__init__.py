"""Durable storage backends for the recent-search list."""

from .base import RecentStorage
from .factory import build_storage
from .file import FileStorage
from .memory import InMemoryStorage
from .redis import RedisStorage

__all__ = [
    "RecentStorage",
    "build_storage",
    "FileStorage",
    "InMemoryStorage",
    "RedisStorage",
]
