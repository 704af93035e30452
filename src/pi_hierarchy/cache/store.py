"""
Key-value cache stores for resolver results.

Values are stored verbatim: no expiry, no eviction, overwritten on the next
``set`` for the same key and never deleted.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)

# Schema version of the JSON cache file
CACHE_STORE_VERSION = 1


class CacheStore(Protocol):
    """get/set store shared by the resolvers."""

    def get(self, key: str) -> Optional[Any]:
        ...

    def set(self, key: str, value: Any) -> None:
        ...


class InMemoryCacheStore:
    """Process-wide dict-backed store."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._entries: dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Optional[Any]:
        return self._entries.get(key)

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class JsonFileCacheStore:
    """
    Store persisted to a JSON file so entries survive restarts.

    The file is read lazily on first access and replaced on every ``set``.
    A missing, unreadable or malformed file starts an empty store.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._entries: dict[str, Any] | None = None
        self._lock = threading.Lock()

    def _load(self) -> dict[str, Any]:
        if self._entries is not None:
            return self._entries

        self._entries = {}
        if not self.path.exists():
            return self._entries

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.error(f"Failed to load cache file {self.path}: {e}")
            return self._entries

        if not isinstance(data, dict) or not isinstance(data.get("entries"), dict):
            logger.error(f"Failed to load cache file {self.path}: expected an object with 'entries'")
            return self._entries

        version = data.get("version", 0)
        if version != CACHE_STORE_VERSION:
            logger.warning(f"Cache file version mismatch: {version} != {CACHE_STORE_VERSION}")

        self._entries = data["entries"]
        return self._entries

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._load().get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            entries = self._load()
            entries[key] = value

            self.path.parent.mkdir(parents=True, exist_ok=True)
            data = {"version": CACHE_STORE_VERSION, "entries": entries}

            # Write to a sibling file, then rename over the cache file
            temp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            try:
                with open(temp_path, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                temp_path.replace(self.path)
            except OSError:
                temp_path.unlink(missing_ok=True)
                raise
