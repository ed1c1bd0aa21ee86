"""Trade Journal Service: Load, recompute and export trade analytics.

Orchestrates the journal use cases:
1. Load a broker export (text or file) into a new canonical trade set
2. Persist / restore / clear the trade set through a TradeRepository
3. Recompute the dashboard (metrics + grouped views) for a filter
4. Build and export the searched, sorted trade log
5. Save grouped views as report tables

The service holds no session state. The caller owns a JournalState and
passes it in; every method returns new values instead of mutating it.
A failed load raises before any state is produced, so the caller's
previous trades stay in place.
"""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Sequence

from trade_analytics.domain.models import FilterCriteria, SortConfig, SortKey, Trade
from trade_analytics.domain.filters import filter_trades, unique_instruments
from trade_analytics.domain.search import search_and_sort
from trade_analytics.domain.metrics import (
    VIEW_NAMES,
    AggregationViews,
    MetricsSnapshot,
    compute_aggregations,
    compute_metrics,
)
from trade_analytics.infrastructure import (
    AnalysisConfig,
    DataPaths,
    DEFAULT_CONFIG,
    DEFAULT_PATHS,
    ParseResult,
    ReadFailureError,
    RepositoryError,
    TradeRepository,
    export_trades_csv,
    parse_trades_csv,
)

logger = logging.getLogger(__name__)

REPORT_FORMATS = ("csv", "parquet")


# =============================================================================
# State and Result Data Classes
# =============================================================================

@dataclass(frozen=True, slots=True)
class JournalState:
    """Presentation-owned journal state.

    Attributes:
        trades: Canonical trade set (input order)
        filters: Working-subset filter
        sort: Trade log ordering
        search: Trade log search text
    """
    trades: tuple[Trade, ...] = ()
    filters: FilterCriteria = field(default_factory=FilterCriteria)
    sort: SortConfig = field(default_factory=SortConfig)
    search: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.trades

    def with_trades(self, trades: Sequence[Trade]) -> "JournalState":
        return replace(self, trades=tuple(trades))

    def with_filters(self, filters: FilterCriteria) -> "JournalState":
        return replace(self, filters=filters)

    def with_search(self, search: str) -> "JournalState":
        return replace(self, search=search)

    def with_sort_key(self, key: SortKey | str) -> "JournalState":
        """Select a log column (same column flips the direction)."""
        return replace(self, sort=self.sort.toggle(key))


@dataclass(frozen=True, slots=True)
class LoadResult:
    """Outcome of a successful load."""
    state: JournalState
    parsed: ParseResult
    persisted: bool

    @property
    def trade_count(self) -> int:
        return len(self.parsed.trades)

    @property
    def skipped_rows(self) -> int:
        return self.parsed.skipped_rows


@dataclass(frozen=True, slots=True)
class DashboardView:
    """Everything the dashboard renders for one filter.

    metrics is None when the filter leaves no trades ("no data"), which
    is different from a snapshot whose values are all zero.
    """
    metrics: MetricsSnapshot | None
    aggregations: AggregationViews
    instruments: tuple[str, ...]
    filtered_count: int

    @property
    def available(self) -> bool:
        return self.metrics is not None


# =============================================================================
# Service
# =============================================================================

class TradeJournalService:
    """Service for the trade journal use cases.

    Example:
        >>> service = TradeJournalService(TradeRepository(FileKeyValueStore()))
        >>> state = service.restore()
        >>> state = service.load_file(state, Path("export.csv")).state
        >>> view = service.dashboard(state)
        >>> view.metrics.total_pnl
        1234.5
    """

    def __init__(
        self,
        repository: TradeRepository | None = None,
        config: AnalysisConfig | None = None,
        paths: DataPaths = DEFAULT_PATHS,
    ):
        """Initialize the service.

        Args:
            repository: Trade persistence (None keeps trades in memory only)
            config: Analysis configuration (uses defaults if not provided)
            paths: Data paths for saved reports
        """
        self._repository = repository
        self._config = config or DEFAULT_CONFIG
        self._paths = paths

    # --- Loading ---

    def load_csv(self, state: JournalState, text: str) -> LoadResult:
        """Replace the trade set with the trades of a broker export.

        Args:
            state: Current state (filters, sort and search are kept)
            text: Raw CSV text

        Returns:
            LoadResult with the new state

        Raises:
            TradeLoadError: If the export is rejected; nothing is replaced
        """
        parsed = parse_trades_csv(text)
        new_state = state.with_trades(parsed.trades)
        persisted = self._persist(parsed.trades)

        logger.info("Successfully loaded %d completed trades", len(parsed.trades))
        return LoadResult(state=new_state, parsed=parsed, persisted=persisted)

    def load_file(self, state: JournalState, path: Path | str) -> LoadResult:
        """Read a broker export from disk and load it.

        Raises:
            ReadFailureError: If the file cannot be read
            TradeLoadError: If the export is rejected
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise ReadFailureError(f"Failed to read file: {e}", str(path))
        return self.load_csv(state, text)

    # --- Persistence ---

    def restore(self, state: JournalState | None = None) -> JournalState:
        """Load persisted trades into a state.

        A failing store is logged and yields no trades.
        """
        state = state or JournalState()
        if self._repository is None:
            return state

        try:
            trades = self._repository.get_all()
        except RepositoryError as e:
            logger.warning("No stored data found: %s", e)
            return state.with_trades(())
        return state.with_trades(trades)

    def clear(self, state: JournalState) -> JournalState:
        """Drop all trades (persisted and in memory)."""
        if self._repository is not None:
            try:
                self._repository.delete()
            except RepositoryError as e:
                logger.warning("Failed to delete stored data: %s", e)
        return state.with_trades(())

    def _persist(self, trades: Sequence[Trade]) -> bool:
        if self._repository is None:
            return False
        try:
            self._repository.save(list(trades))
        except RepositoryError as e:
            logger.warning("Storage not available, data will not persist: %s", e)
            return False
        return True

    # --- Views ---

    def recompute(
        self,
        trades: Sequence[Trade],
        filters: FilterCriteria | None = None,
    ) -> DashboardView:
        """Recompute metrics and grouped views for a filter.

        Args:
            trades: Canonical trade set
            filters: Filter criteria (None for all trades)

        Returns:
            DashboardView computed from scratch
        """
        subset = filter_trades(trades, filters)
        metrics = compute_metrics(
            subset,
            sentinel=self._config.ratio_sentinel,
            top_n=self._config.top_trades,
            max_gap_hours=self._config.max_gap_hours,
        )
        return DashboardView(
            metrics=metrics,
            aggregations=compute_aggregations(subset),
            instruments=tuple(unique_instruments(trades)),
            filtered_count=len(subset),
        )

    def dashboard(self, state: JournalState) -> DashboardView:
        """Dashboard for the state's trades and filters."""
        return self.recompute(state.trades, state.filters)

    def log_view(self, state: JournalState) -> list[Trade]:
        """Filtered, searched and sorted trade log."""
        subset = filter_trades(state.trades, state.filters)
        return search_and_sort(subset, state.search, state.sort)

    def export_csv(self, state: JournalState) -> str:
        """Trade log as CSV text."""
        return export_trades_csv(self.log_view(state))

    # --- Reports ---

    def save_views(
        self,
        view: DashboardView,
        base_name: str = "trade_report",
        formats: tuple[str, ...] = ("csv",),
        views: Sequence[str] = VIEW_NAMES,
    ) -> list[Path]:
        """Save grouped views as report tables.

        Args:
            view: Dashboard to save
            base_name: File name prefix
            formats: Output formats ("csv", "parquet")
            views: Grouped views to save

        Returns:
            List of saved file paths

        Raises:
            ValueError: If a format is not supported (nothing is written)
        """
        unknown = [fmt for fmt in formats if fmt not in REPORT_FORMATS]
        if unknown:
            raise ValueError(f"Unknown format: {', '.join(unknown)}")

        self._paths.reports_dir.mkdir(parents=True, exist_ok=True)
        saved = []

        for name in views:
            df = view.aggregations.to_frame(name)
            for fmt in formats:
                path = self._paths.report_path(f"{base_name}_{name}", fmt)

                if fmt == "csv":
                    df.write_csv(path)
                else:
                    df.write_parquet(path)

                saved.append(path)

        return saved
