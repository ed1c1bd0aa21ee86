"""Trading metrics for journal performance analysis.

This package provides the analytics behind the dashboard:

- Performance: P&L, win/loss rates, risk ratios, equity curve, streaks
- Aggregation: Grouped views by month, weekday, hour, direction, instrument

Usage:
    from trade_analytics.domain.metrics import (
        compute_metrics,
        compute_aggregations,
    )
"""

# Performance
from trade_analytics.domain.metrics.performance import (
    RATIO_SENTINEL,
    EquityPoint,
    StreakResult,
    MetricsSnapshot,
    ratio_or_sentinel,
    sort_by_time,
    build_equity_curve,
    max_drawdown,
    average_gap_minutes,
    calculate_streaks,
    rank_trades,
    compute_metrics,
)

# Aggregation
from trade_analytics.domain.metrics.aggregation import (
    WEEKDAYS,
    VIEW_NAMES,
    MonthlyStat,
    WeekdayStat,
    HourStat,
    DirectionStat,
    InstrumentStat,
    AggregationViews,
    compute_aggregations,
)

__all__ = [
    # Performance
    "RATIO_SENTINEL",
    "EquityPoint",
    "StreakResult",
    "MetricsSnapshot",
    "ratio_or_sentinel",
    "sort_by_time",
    "build_equity_curve",
    "max_drawdown",
    "average_gap_minutes",
    "calculate_streaks",
    "rank_trades",
    "compute_metrics",
    # Aggregation
    "WEEKDAYS",
    "VIEW_NAMES",
    "MonthlyStat",
    "WeekdayStat",
    "HourStat",
    "DirectionStat",
    "InstrumentStat",
    "AggregationViews",
    "compute_aggregations",
]
