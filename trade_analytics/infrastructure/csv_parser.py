"""CSV Parser: Broker export text to validated trades.

Reads the Capital.com style transaction export:

    Trade Id,Instrument Symbol,Quantity,Price,Rpl Converted,Fee,...
    "T1","US100",-2,100,50,5,...

Validation rules:
- Blank lines are ignored; header plus at least one row is required
- Required columns: Trade Id, Quantity, Price, Timestamp
- Rows with a non-numeric quantity/price, zero quantity or an
  unparsable timestamp are skipped and counted
- Rows with zero realized P&L are open/pending and dropped
"""

import logging
import math
import re
from dataclasses import dataclass
from datetime import datetime

from trade_analytics.domain.models import Direction, Trade
from trade_analytics.infrastructure.errors import (
    EmptyInputError,
    MissingColumnsError,
    NoCompletedTradesError,
)

logger = logging.getLogger(__name__)

DELIMITER = ","
QUOTE = '"'

REQUIRED_COLUMNS = ("Trade Id", "Quantity", "Price", "Timestamp")
OPTIONAL_COLUMNS = (
    "Instrument Symbol",
    "Instrument Name",
    "Rpl Converted",
    "Fee",
    "Swap Converted",
    "Take Profit",
    "Stop Loss",
    "Execution Type",
    "Status",
)

# Leading numeric prefix: "12.5abc" -> 12.5, "abc" -> no number
_NUMBER_PREFIX = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

_TIMESTAMP_FORMATS = (
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
)


# =============================================================================
# Result
# =============================================================================

@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of a successful parse.

    Attributes:
        trades: Completed trades in input row order
        skipped_rows: Rows rejected by validation
        pending_rows: Valid rows with zero realized P&L
    """
    trades: tuple[Trade, ...]
    skipped_rows: int
    pending_rows: int

    @property
    def valid_rows(self) -> int:
        """Rows that passed validation (completed + pending)."""
        return len(self.trades) + self.pending_rows


# =============================================================================
# Field Helpers
# =============================================================================

def split_csv_line(line: str, delimiter: str = DELIMITER) -> list[str]:
    """Split one line into trimmed fields.

    A double quote toggles the in-quotes state and is dropped; a
    delimiter inside quotes is kept as text. Quotes are not unescaped
    any further.

    Example:
        >>> split_csv_line('T1,"Apple, Inc.", 10 ')
        ['T1', 'Apple, Inc.', '10']
    """
    values = []
    current = []
    in_quotes = False

    for char in line:
        if char == QUOTE:
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            values.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    values.append("".join(current).strip())
    return values


def parse_number(text: str) -> float | None:
    """Parse the leading number of a field, None if there is none.

    Example:
        >>> parse_number("-2.5")
        -2.5
        >>> parse_number("12abc")
        12.0
        >>> parse_number("n/a") is None
        True
    """
    match = _NUMBER_PREFIX.match(text.strip())
    if match is None:
        return None
    value = float(match.group())
    if not math.isfinite(value):
        return None
    return value


def parse_number_or_zero(text: str) -> float:
    """Parse an optional numeric field, 0 when absent or unparsable."""
    value = parse_number(text)
    return value if value is not None else 0.0


def parse_timestamp(text: str) -> datetime | None:
    """Parse a timestamp into naive local wall time.

    Accepts ISO-8601 (with optional offset) and the YYYY/MM/DD or
    MM/DD/YYYY slash forms. Offset-aware values are converted to the
    local timezone.

    Returns:
        Parsed datetime, or None if the text is not a timestamp
    """
    text = text.strip()
    if not text:
        return None

    parsed = None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        for fmt in _TIMESTAMP_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue

    if parsed is None:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


# =============================================================================
# Parser
# =============================================================================

def _parse_row(row: dict[str, str]) -> Trade | None | bool:
    """Build a trade from a header-mapped row.

    Returns:
        Trade for a completed row, False for a pending row (zero P&L),
        None for an invalid row
    """
    raw_quantity = parse_number(row["Quantity"])
    price = parse_number(row["Price"])
    if raw_quantity is None or price is None or raw_quantity == 0:
        return None

    timestamp = parse_timestamp(row["Timestamp"])
    if timestamp is None:
        return None

    gross_pnl = parse_number_or_zero(row.get("Rpl Converted", ""))
    if gross_pnl == 0:
        return False

    return Trade(
        id=row["Trade Id"],
        instrument=row.get("Instrument Symbol", "") or row.get("Instrument Name", ""),
        direction=Direction.from_quantity(raw_quantity),
        quantity=abs(raw_quantity),
        price=price,
        gross_pnl=gross_pnl,
        timestamp=timestamp,
        timestamp_text=row["Timestamp"],
        fee=parse_number_or_zero(row.get("Fee", "")),
        swap=parse_number_or_zero(row.get("Swap Converted", "")),
        take_profit=parse_number_or_zero(row.get("Take Profit", "")),
        stop_loss=parse_number_or_zero(row.get("Stop Loss", "")),
        execution_type=row.get("Execution Type", ""),
        status=row.get("Status", ""),
    )


def parse_trades_csv(text: str) -> ParseResult:
    """Parse a broker export into completed trades.

    Args:
        text: Raw CSV text

    Returns:
        ParseResult with trades in input row order (not time-sorted)

    Raises:
        EmptyInputError: Fewer than two non-blank lines
        MissingColumnsError: A required column is absent
        NoCompletedTradesError: No row has non-zero realized P&L

    Example:
        >>> result = parse_trades_csv(open("export.csv").read())
        >>> len(result.trades), result.skipped_rows
        (120, 3)
    """
    text = text.removeprefix("\ufeff")
    lines = [line for line in text.split("\n") if line.strip()]
    if len(lines) < 2:
        raise EmptyInputError()

    headers = split_csv_line(lines[0])
    missing = [col for col in REQUIRED_COLUMNS if col not in headers]
    if missing:
        raise MissingColumnsError(missing)

    trades = []
    skipped = 0
    pending = 0

    for line in lines[1:]:
        values = split_csv_line(line)
        row = {
            header: values[i] if i < len(values) else ""
            for i, header in enumerate(headers)
        }

        trade = _parse_row(row)
        if trade is None:
            skipped += 1
        elif trade is False:
            pending += 1
        else:
            trades.append(trade)

    if skipped > 0:
        logger.warning("Skipped %d invalid rows during CSV parsing", skipped)

    if not trades:
        raise NoCompletedTradesError(pending)

    logger.info(
        "Parsed %d total trades, %d completed trades",
        len(trades) + pending, len(trades),
    )
    return ParseResult(trades=tuple(trades), skipped_rows=skipped, pending_rows=pending)
