"""Unit tests for infrastructure repositories.

Tests verify that repositories:
1. Round-trip the trade list through a key/value store
2. Provide proper caching
3. Handle errors gracefully
"""

import json

import pytest

from trade_analytics.infrastructure import (
    DataPaths,
    DEFAULT_CONFIG,
    RepositoryError,
)
from trade_analytics.infrastructure.repositories import (
    FileKeyValueStore,
    MemoryKeyValueStore,
    TradeRepository,
    deserialize_trades,
    serialize_trades,
)


@pytest.fixture
def paths(tmp_path) -> DataPaths:
    return DataPaths(root=tmp_path)


# =============================================================================
# DataPaths Tests
# =============================================================================

class TestDataPaths:
    """Tests for DataPaths configuration."""

    def test_paths_are_consistent(self, paths):
        """All paths should be relative to root directory."""
        assert paths.store_dir == paths.root / "data" / "store"
        assert paths.reports_dir == paths.root / "data" / "reports"
        assert paths.store_path("trading-data") == paths.store_dir / "trading-data.json"
        assert paths.report_path("monthly", "csv") == paths.reports_dir / "monthly.csv"

    def test_ensure_dirs(self, paths):
        paths.ensure_dirs()
        assert paths.store_dir.is_dir()
        assert paths.reports_dir.is_dir()


# =============================================================================
# KeyValueStore Tests
# =============================================================================

class TestMemoryKeyValueStore:
    """Tests for MemoryKeyValueStore."""

    def test_get_missing(self):
        assert MemoryKeyValueStore().get("k") is None

    def test_set_get_delete(self):
        store = MemoryKeyValueStore()
        store.set("k", "v")
        assert store.get("k") == "v"
        assert "k" in store
        store.delete("k")
        assert "k" not in store

    def test_delete_missing_is_noop(self):
        MemoryKeyValueStore().delete("k")

    def test_initial_copied(self):
        initial = {"k": "v"}
        store = MemoryKeyValueStore(initial)
        store.set("k", "w")
        assert initial["k"] == "v"


class TestFileKeyValueStore:
    """Tests for FileKeyValueStore."""

    def test_get_missing(self, paths):
        assert FileKeyValueStore(paths).get("k") is None

    def test_set_creates_file(self, paths):
        store = FileKeyValueStore(paths)
        store.set("k", "hello")
        assert paths.store_path("k").read_text(encoding="utf-8") == "hello"
        assert store.get("k") == "hello"

    def test_set_replaces(self, paths):
        store = FileKeyValueStore(paths)
        store.set("k", "one")
        store.set("k", "two")
        assert store.get("k") == "two"
        assert not paths.store_path("k").with_suffix(".tmp").exists()

    def test_delete(self, paths):
        store = FileKeyValueStore(paths)
        store.set("k", "v")
        store.delete("k")
        assert store.get("k") is None
        store.delete("k")

    def test_unwritable_raises(self, tmp_path):
        """A file where the data directory should be makes writes fail."""
        (tmp_path / "data").write_text("not a directory")
        store = FileKeyValueStore(DataPaths(root=tmp_path))
        with pytest.raises(RepositoryError):
            store.set("k", "v")


# =============================================================================
# TradeRepository Tests
# =============================================================================

class TestSerialization:
    """Tests for trade list serialization."""

    def test_roundtrip(self, make_trade):
        trades = [make_trade(10), make_trade(-4, fee=1.5)]
        assert deserialize_trades(serialize_trades(trades)) == trades

    def test_json_array(self, make_trade):
        data = json.loads(serialize_trades([make_trade(10)]))
        assert isinstance(data, list)
        assert data[0]["net_pnl"] == 10.0

    def test_not_an_array(self):
        with pytest.raises(ValueError, match="JSON array"):
            deserialize_trades('{"id": "T1"}')


class TestTradeRepository:
    """Tests for TradeRepository."""

    @pytest.fixture
    def store(self):
        return MemoryKeyValueStore()

    @pytest.fixture
    def repo(self, store):
        return TradeRepository(store)

    def test_default_key(self, repo):
        assert repo.key == DEFAULT_CONFIG.storage_key == "trading-data"

    def test_empty_store(self, repo):
        assert repo.get_all() == []

    def test_save_and_get(self, repo, store, make_trade):
        trades = [make_trade(10), make_trade(-5)]
        repo.save(trades)
        assert "trading-data" in store
        assert repo.get_all() == trades

    def test_get_returns_copy(self, repo, make_trade):
        repo.save([make_trade(10)])
        repo.get_all().clear()
        assert len(repo.get_all()) == 1

    def test_fresh_repository_reads_store(self, store, make_trade):
        """Trades saved by one repository are visible to another."""
        trades = [make_trade(3)]
        TradeRepository(store).save(trades)
        assert TradeRepository(store).get_all() == trades

    def test_cache_and_clear_cache(self, repo, store, make_trade):
        repo.save([make_trade(1)])
        store.set("trading-data", "[]")
        assert len(repo.get_all()) == 1
        repo.clear_cache()
        assert repo.get_all() == []

    def test_delete(self, repo, store, make_trade):
        repo.save([make_trade(1)])
        repo.delete()
        assert "trading-data" not in store
        assert repo.get_all() == []

    @pytest.mark.parametrize("text", ["not json", '{"a": 1}', '[{"id": "T1"}]'])
    def test_invalid_data_raises(self, store, text):
        store.set("trading-data", text)
        with pytest.raises(RepositoryError, match="Stored trades are invalid"):
            TradeRepository(store).get_all()

    def test_file_backed(self, paths, make_trade):
        trades = [make_trade(7, instrument="Gold, spot")]
        TradeRepository(FileKeyValueStore(paths)).save(trades)
        assert paths.store_path("trading-data").exists()
        assert TradeRepository(FileKeyValueStore(paths)).get_all() == trades

    def test_custom_key(self, store, make_trade):
        repo = TradeRepository(store, key="other")
        repo.save([make_trade(1)])
        assert "other" in store
        assert repo.key == "other"
