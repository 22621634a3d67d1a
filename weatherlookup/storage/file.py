"""JSON-file storage: one file holding a {key: value} object."""

import json
import os
import threading
from pathlib import Path
from typing import Optional

from weatherlookup.storage.base import RecentStorage
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="storage/file_storage")


class FileStorage(RecentStorage):
    """Durable local storage backed by a single JSON file.

    A missing or unreadable file behaves like empty storage. Writes go to a
    temporary sibling file that replaces the original, so a crash mid-write
    never leaves a truncated file behind.
    """

    def __init__(self, path: Path | str) -> None:
        logger.debug("Initializing FileStorage", extra={"path": str(path)})
        self.path = Path(path).expanduser()
        self._lock = threading.Lock()

    def _load_all(self) -> dict[str, str]:
        """Read the whole file; anything unusable yields {}."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            logger.warning("Failed to read storage file", extra={"path": str(self.path), "error": str(exc)})
            return {}
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring corrupt storage file", extra={"path": str(self.path)})
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _dump_all(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(tmp, self.path)

    def read(self, key: str) -> Optional[str]:
        with self._lock:
            return self._load_all().get(key)

    def write(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load_all()
            data[key] = value
            self._dump_all(data)

    def delete(self, key: str) -> None:
        with self._lock:
            data = self._load_all()
            if key not in data:
                return
            del data[key]
            self._dump_all(data)
