"""Domain Layer: Core business logic and entities.

This layer contains:
- models.py: Data structures (Trade, FilterCriteria, SortConfig)
- filters.py: Working-subset filter
- search.py: Trade log search and ordering
- metrics/: Performance metrics and grouped views
"""

from trade_analytics.domain.models import (
    ALL,
    Direction,
    SortKey,
    Trade,
    FilterCriteria,
    SortConfig,
)
from trade_analytics.domain.filters import (
    filter_trades,
    unique_instruments,
)
from trade_analytics.domain.search import (
    matches_search,
    search_and_sort,
)
from trade_analytics.domain.metrics import (
    MetricsSnapshot,
    EquityPoint,
    compute_metrics,
    AggregationViews,
    compute_aggregations,
)

__all__ = [
    # Models
    "ALL",
    "Direction",
    "SortKey",
    "Trade",
    "FilterCriteria",
    "SortConfig",
    # Filter / Search
    "filter_trades",
    "unique_instruments",
    "matches_search",
    "search_and_sort",
    # Metrics
    "MetricsSnapshot",
    "EquityPoint",
    "compute_metrics",
    "AggregationViews",
    "compute_aggregations",
]
