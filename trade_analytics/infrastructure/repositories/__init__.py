"""Data repositories for Trade Analytics.

Provides abstracted data access through the Repository pattern:
- KeyValueStore: Opaque get/set/delete storage collaborator
- TradeRepository: Persisted canonical trade set
"""

from trade_analytics.infrastructure.repositories.base import Repository, RepositoryError
from trade_analytics.infrastructure.repositories.kv_store import (
    KeyValueStore,
    MemoryKeyValueStore,
    FileKeyValueStore,
)
from trade_analytics.infrastructure.repositories.trade_repo import (
    TradeRepository,
    serialize_trades,
    deserialize_trades,
)

__all__ = [
    "Repository",
    "RepositoryError",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "FileKeyValueStore",
    "TradeRepository",
    "serialize_trades",
    "deserialize_trades",
]
