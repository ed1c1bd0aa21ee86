"""CSV Export: Trade log view to delimited text.

Output columns:
    Date,Instrument,Direction,Quantity,Price,P&L,Fees,Net P&L

Quoting follows the parser convention (a quote toggles the in-quotes
state and is never escaped), so exported text can be re-parsed by
csv_parser.split_csv_line.
"""

from datetime import datetime
from typing import Sequence

from trade_analytics.domain.models import Trade
from trade_analytics.infrastructure.csv_parser import DELIMITER, QUOTE

EXPORT_HEADER = ("Date", "Instrument", "Direction", "Quantity", "Price", "P&L", "Fees", "Net P&L")


def format_timestamp(value: datetime) -> str:
    """Locale-independent timestamp, e.g. 2024-01-15T10:30:00."""
    return value.isoformat(timespec="seconds")


def format_money(value: float) -> str:
    """Two decimal places, e.g. -22.00."""
    return f"{value:.2f}"


def format_quantity(value: float) -> str:
    """Shortest form: 2.0 -> "2", 0.5 -> "0.5"."""
    if value.is_integer():
        return str(int(value))
    return repr(value)


def quote_field(value: str, delimiter: str = DELIMITER) -> str:
    """Quote a field that contains the delimiter or a quote.

    Embedded quotes are dropped because the parser treats every quote
    as a toggle. Line breaks become spaces.
    """
    value = value.replace("\r", " ").replace("\n", " ")
    if delimiter in value or QUOTE in value:
        return QUOTE + value.replace(QUOTE, "") + QUOTE
    return value


def trade_to_row(trade: Trade) -> list[str]:
    """Export fields of one trade, unquoted."""
    return [
        format_timestamp(trade.timestamp),
        trade.instrument,
        trade.direction.value,
        format_quantity(trade.quantity),
        format_money(trade.price),
        format_money(trade.gross_pnl),
        format_money(trade.fee),
        format_money(trade.net_pnl),
    ]


def export_trades_csv(trades: Sequence[Trade], delimiter: str = DELIMITER) -> str:
    """Serialize the trade log view.

    Args:
        trades: Trades in display order (already searched and sorted)
        delimiter: Field delimiter

    Returns:
        CSV text with a header line, rows joined by newlines

    Example:
        >>> print(export_trades_csv([trade]))
        Date,Instrument,Direction,Quantity,Price,P&L,Fees,Net P&L
        2024-01-15T10:30:00,US100,Short,2,100.00,50.00,5.00,46.00
    """
    lines = [delimiter.join(EXPORT_HEADER)]
    for trade in trades:
        fields = [quote_field(v, delimiter) for v in trade_to_row(trade)]
        lines.append(delimiter.join(fields))
    return "\n".join(lines)
