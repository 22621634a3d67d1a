"""Shared protocol for recent-search storage backends."""

from typing import Optional, Protocol


class RecentStorage(Protocol):
    """Key/value string storage, modelled on browser localStorage."""

    def read(self, key: str) -> Optional[str]:
        """Return the stored string, or None if the key is absent."""

    def write(self, key: str, value: str) -> None:
        """Store `value` under `key`, replacing any previous value."""

    def delete(self, key: str) -> None:
        """Remove `key` without raising if it is absent."""
