"""Trade Repository: Persisted canonical trade set.

Stores the trade list as a JSON array under one logical key of a
KeyValueStore. Net P&L is written for readability but always
recomputed on load.
"""

import json

from trade_analytics.domain.models import Trade
from trade_analytics.infrastructure.config import DEFAULT_CONFIG
from trade_analytics.infrastructure.repositories.base import Repository, RepositoryError
from trade_analytics.infrastructure.repositories.kv_store import (
    KeyValueStore,
    MemoryKeyValueStore,
)


def serialize_trades(trades: list[Trade]) -> str:
    """Trade list to JSON text."""
    return json.dumps([t.to_dict() for t in trades], ensure_ascii=False)


def deserialize_trades(text: str) -> list[Trade]:
    """JSON text to trade list.

    Raises:
        ValueError: If the text is not a valid trade list
    """
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("Stored trades must be a JSON array")
    return [Trade.from_dict(item) for item in data]


class TradeRepository(Repository[list[Trade]]):
    """Repository for the persisted trade list.

    Example:
        >>> repo = TradeRepository(FileKeyValueStore())
        >>> repo.save(trades)
        >>> trades = repo.get_all()
        >>> repo.delete()
    """

    def __init__(
        self,
        store: KeyValueStore | None = None,
        key: str = DEFAULT_CONFIG.storage_key,
    ):
        self._store = store if store is not None else MemoryKeyValueStore()
        self._key = key
        self._cache: list[Trade] | None = None

    @property
    def key(self) -> str:
        return self._key

    def get_all(self) -> list[Trade]:
        """Load the persisted trades.

        Returns:
            Stored trades in their saved order (empty if nothing stored)

        Raises:
            RepositoryError: If the store fails or holds invalid data
        """
        if self._cache is not None:
            return list(self._cache)

        text = self._store.get(self._key)
        if not text:
            return []

        try:
            trades = deserialize_trades(text)
        except (ValueError, KeyError, TypeError) as e:
            raise RepositoryError(f"Stored trades are invalid: {e}", self._key)

        self._cache = trades
        return list(trades)

    def save(self, trades: list[Trade]) -> None:
        """Replace the persisted trades.

        Raises:
            RepositoryError: If the store fails
        """
        self._store.set(self._key, serialize_trades(list(trades)))
        self._cache = list(trades)

    def delete(self) -> None:
        """Remove the persisted trades."""
        self._store.delete(self._key)
        self._cache = None

    def clear_cache(self) -> None:
        """Clear cached data."""
        self._cache = None
