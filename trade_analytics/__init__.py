"""Trade Analytics: Performance analysis for broker trade exports.

A modular system for importing a broker's CSV export and computing
trading performance analytics: P&L, risk ratios, equity curve and
drawdown, streaks, rankings and time-bucketed views.

Architecture:
- domain/: Core business logic (models, filter, search, metrics)
- infrastructure/: I/O and external dependencies (CSV, persistence)
- application/: Use cases and services
- interfaces/: CLI
"""

__version__ = "0.3.0"

from trade_analytics.domain import (
    Direction,
    Trade,
    FilterCriteria,
    SortConfig,
    SortKey,
    MetricsSnapshot,
    AggregationViews,
)
from trade_analytics.infrastructure import (
    DataPaths,
    AnalysisConfig,
    DEFAULT_PATHS,
    DEFAULT_CONFIG,
    TradeLoadError,
    RepositoryError,
)

__all__ = [
    # Version
    "__version__",
    # Domain models
    "Direction",
    "Trade",
    "FilterCriteria",
    "SortConfig",
    "SortKey",
    "MetricsSnapshot",
    "AggregationViews",
    # Infrastructure
    "DataPaths",
    "AnalysisConfig",
    "DEFAULT_PATHS",
    "DEFAULT_CONFIG",
    "TradeLoadError",
    "RepositoryError",
]
