"""Sort/Search: Ordered view of the filtered trades for the trade log.

Independent of the metrics: the log ordering never feeds back into
P&L, equity curve or streak calculations.
"""

from datetime import datetime
from typing import Sequence

from trade_analytics.domain.models import SortConfig, SortKey, Trade


def matches_search(trade: Trade, term: str) -> bool:
    """Case-insensitive substring match on instrument, id or direction."""
    term = term.lower()
    return (
        term in trade.instrument.lower()
        or term in trade.id.lower()
        or term in trade.direction.value.lower()
    )


def sort_value(trade: Trade, key: SortKey) -> float | str | datetime:
    """Comparable value of a trade for the given column."""
    if key == SortKey.TIMESTAMP:
        return trade.timestamp
    if key == SortKey.INSTRUMENT:
        return trade.instrument.lower()
    if key == SortKey.DIRECTION:
        return trade.direction.value.lower()
    return getattr(trade, key.value)


def search_and_sort(
    trades: Sequence[Trade],
    search: str = "",
    sort: SortConfig | None = None,
) -> list[Trade]:
    """Build the trade log view.

    Args:
        trades: Filtered trades
        search: Optional search text (blank disables the search)
        sort: Sort column and direction (default: newest first)

    Returns:
        New list, searched then stably sorted

    Example:
        >>> rows = search_and_sort(trades, "us100", SortConfig(SortKey.NET_PNL, "asc"))
    """
    sort = sort or SortConfig()
    rows = list(trades)

    if search:
        rows = [t for t in rows if matches_search(t, search)]

    # reverse=True keeps ties in their original order
    rows.sort(key=lambda t: sort_value(t, sort.key), reverse=not sort.ascending)
    return rows
