"""Bounded, deduplicated, most-recent-first list of looked-up place labels."""
from __future__ import annotations

import json
from typing import List

from weatherlookup.storage import RecentStorage
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="recent_searches")

DEFAULT_STORAGE_KEY = "weather_recent_v1"
DEFAULT_LIMIT = 6


class RecentSearchStore:
    """Recent place labels persisted as a JSON array under one versioned key.

    The store is the only writer of its persisted entry; every `record` and
    `clear` writes through immediately.
    """

    def __init__(
        self,
        storage: RecentStorage,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        limit: int = DEFAULT_LIMIT,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.storage = storage
        self.key = key
        self.limit = limit
        self._labels: List[str] = self.load()

    @property
    def labels(self) -> List[str]:
        """A copy of the current list, most recent first."""
        return list(self._labels)

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self):
        return iter(list(self._labels))

    def load(self) -> List[str]:
        """Read the persisted list; missing or malformed data yields []."""
        try:
            raw = self.storage.read(self.key)
        except Exception as exc:
            logger.warning("Failed to read recent searches", extra={"key": self.key, "error": str(exc)})
            return []
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring malformed recent searches", extra={"key": self.key})
            return []
        if not isinstance(data, list):
            return []

        labels: List[str] = []
        for item in data:
            if isinstance(item, str) and item not in labels:
                labels.append(item)
        return labels[: self.limit]

    def persist(self) -> None:
        """Write the list through to storage; failures are logged, the in-memory list is kept."""
        try:
            if self._labels:
                self.storage.write(self.key, json.dumps(self._labels, ensure_ascii=False))
            else:
                self.storage.delete(self.key)
        except Exception as exc:
            logger.error("Failed to persist recent searches", extra={"key": self.key, "error": str(exc)})

    def record(self, label: str) -> List[str]:
        """Move `label` to the front (adding it if new), cap the list and persist."""
        self._labels = [label] + [existing for existing in self._labels if existing != label]
        del self._labels[self.limit:]
        logger.debug("Recorded recent search", extra={"label": label, "count": len(self._labels)})
        self.persist()
        return self.labels

    def clear(self) -> None:
        """Forget every recent search and persist the empty list."""
        self._labels = []
        self.persist()
