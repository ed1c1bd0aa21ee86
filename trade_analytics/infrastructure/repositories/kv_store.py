"""Key/Value Stores: Opaque text storage under string keys.

The persistence collaborator only needs get/set/delete of one text
value per key:
- MemoryKeyValueStore: Process-local dict (tests, ephemeral sessions)
- FileKeyValueStore: One JSON file per key under data/store/
"""

from abc import ABC, abstractmethod

from trade_analytics.infrastructure.config import DataPaths, DEFAULT_PATHS
from trade_analytics.infrastructure.repositories.base import RepositoryError


class KeyValueStore(ABC):
    """Text values addressed by key."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Value for key, or None if the key is not set."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key (no-op if absent)."""


class MemoryKeyValueStore(KeyValueStore):
    """In-memory store.

    Example:
        >>> store = MemoryKeyValueStore()
        >>> store.set("trading-data", "[]")
        >>> store.get("trading-data")
        '[]'
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class FileKeyValueStore(KeyValueStore):
    """File-backed store: data/store/{key}.json.

    Example:
        >>> store = FileKeyValueStore(DataPaths(root=Path("/tmp/journal")))
        >>> store.set("trading-data", "[]")
    """

    def __init__(self, paths: DataPaths = DEFAULT_PATHS):
        self._paths = paths

    def get(self, key: str) -> str | None:
        path = self._paths.store_path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise RepositoryError(f"Failed to read store key {key}: {e}", str(path))

    def set(self, key: str, value: str) -> None:
        path = self._paths.store_path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp = path.with_suffix(".tmp")
            tmp.write_text(value, encoding="utf-8")
            tmp.replace(path)
        except OSError as e:
            raise RepositoryError(f"Failed to write store key {key}: {e}", str(path))

    def delete(self, key: str) -> None:
        path = self._paths.store_path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise RepositoryError(f"Failed to delete store key {key}: {e}", str(path))
