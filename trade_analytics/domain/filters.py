"""Filter Engine: Derive the working trade subset.

The working subset is recomputed in full whenever the canonical trade
set or the filter criteria change. Filtering never reorders trades.
"""

from typing import Iterable, Sequence

from trade_analytics.domain.models import ALL, FilterCriteria, Trade


def matches(trade: Trade, criteria: FilterCriteria) -> bool:
    """Check a single trade against the criteria (date bounds inclusive)."""
    day = trade.timestamp.date()
    if criteria.start is not None and day < criteria.start:
        return False
    if criteria.end is not None and day > criteria.end:
        return False
    if criteria.direction != ALL and trade.direction.value != criteria.direction:
        return False
    if criteria.instrument != ALL and trade.instrument != criteria.instrument:
        return False
    return True


def filter_trades(
    trades: Sequence[Trade],
    criteria: FilterCriteria | None = None,
) -> list[Trade]:
    """Return the trades matching the criteria, in their original order.

    Args:
        trades: Canonical trade set
        criteria: Filter criteria (None imposes no constraint)

    Returns:
        New list with the matching trades

    Example:
        >>> subset = filter_trades(trades, FilterCriteria(direction="Long"))
    """
    if criteria is None or criteria.is_empty:
        return list(trades)
    return [t for t in trades if matches(t, criteria)]


def unique_instruments(trades: Iterable[Trade]) -> list[str]:
    """Distinct instruments in first-seen order."""
    return list(dict.fromkeys(t.instrument for t in trades))
