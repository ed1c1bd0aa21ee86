"""Domain Models: Core data structures for trade analytics.

These models represent the fundamental business entities:
- Trade: A completed trade imported from a broker export
- Direction: Enum for trade direction (Long / Short)
- FilterCriteria: Caller-owned filter for the working trade subset
- SortConfig: Caller-owned ordering for the trade log

Design Principles:
- Immutable (frozen dataclass)
- Validation in __post_init__
- Computed properties for derived values (net P&L is never stored)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum
from typing import Literal

SortDirection = Literal["asc", "desc"]

ALL = "all"


class Direction(str, Enum):
    """Trade direction, derived from the sign of the raw quantity."""

    LONG = "Long"
    SHORT = "Short"

    @classmethod
    def from_quantity(cls, raw_quantity: float) -> Direction:
        """Long for a positive signed quantity, Short otherwise."""
        return cls.LONG if raw_quantity > 0 else cls.SHORT


class SortKey(str, Enum):
    """Columns the trade log can be ordered by."""

    TIMESTAMP = "timestamp"
    NET_PNL = "net_pnl"
    GROSS_PNL = "gross_pnl"
    FEE = "fee"
    QUANTITY = "quantity"
    PRICE = "price"
    INSTRUMENT = "instrument"
    DIRECTION = "direction"

    @property
    def is_text(self) -> bool:
        """Text keys compare case-insensitively instead of numerically."""
        return self in (SortKey.INSTRUMENT, SortKey.DIRECTION)


@dataclass(frozen=True, slots=True)
class Trade:
    """A single completed trade.

    Attributes:
        id: Broker trade identifier
        instrument: Instrument symbol (or name when the symbol is blank)
        direction: Long or Short
        quantity: Absolute traded quantity (must be positive)
        price: Execution price
        gross_pnl: Realized P&L as reported by the broker (must be non-zero)
        timestamp: Execution time (naive, local wall time)
        timestamp_text: Original timestamp text, kept for display
        fee: Commission charged
        swap: Overnight financing adjustment
        take_profit: Take profit level (0 if none)
        stop_loss: Stop loss level (0 if none)
        execution_type: Opaque broker execution type
        status: Opaque broker status

    Example:
        >>> trade = Trade(
        ...     id="T1", instrument="US100", direction=Direction.SHORT,
        ...     quantity=2, price=100.0, gross_pnl=50.0,
        ...     timestamp=datetime(2024, 1, 15, 10, 30),
        ...     fee=5.0, swap=1.0,
        ... )
        >>> trade.net_pnl
        46.0
    """

    id: str
    instrument: str
    direction: Direction
    quantity: float
    price: float
    gross_pnl: float
    timestamp: datetime
    timestamp_text: str = ""
    fee: float = 0.0
    swap: float = 0.0
    take_profit: float = 0.0
    stop_loss: float = 0.0
    execution_type: str = ""
    status: str = ""

    def __post_init__(self) -> None:
        """Validate all fields after initialization."""
        if not self.quantity > 0:
            raise ValueError(f"quantity must be positive, got: {self.quantity}")
        if self.gross_pnl == 0 or math.isnan(self.gross_pnl):
            raise ValueError("gross_pnl must be non-zero for a completed trade")
        if not isinstance(self.direction, Direction):
            object.__setattr__(self, "direction", Direction(self.direction))
        if not self.timestamp_text:
            object.__setattr__(self, "timestamp_text", self.timestamp.isoformat())

    @property
    def net_pnl(self) -> float:
        """Realized P&L minus fees plus swap."""
        return self.gross_pnl - self.fee + self.swap

    @property
    def is_winner(self) -> bool:
        return self.net_pnl > 0

    @property
    def is_loser(self) -> bool:
        return self.net_pnl < 0

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dictionary."""
        return {
            "id": self.id,
            "instrument": self.instrument,
            "direction": self.direction.value,
            "quantity": self.quantity,
            "price": self.price,
            "gross_pnl": self.gross_pnl,
            "fee": self.fee,
            "swap": self.swap,
            "net_pnl": self.net_pnl,
            "take_profit": self.take_profit,
            "stop_loss": self.stop_loss,
            "timestamp": self.timestamp.isoformat(),
            "timestamp_text": self.timestamp_text,
            "execution_type": self.execution_type,
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Trade:
        """Rebuild a trade from to_dict() output.

        The stored net_pnl is ignored and always recomputed.
        """
        return cls(
            id=str(data["id"]),
            instrument=str(data["instrument"]),
            direction=Direction(data["direction"]),
            quantity=float(data["quantity"]),
            price=float(data["price"]),
            gross_pnl=float(data["gross_pnl"]),
            timestamp=datetime.fromisoformat(data["timestamp"]),
            timestamp_text=data.get("timestamp_text", ""),
            fee=float(data.get("fee", 0.0)),
            swap=float(data.get("swap", 0.0)),
            take_profit=float(data.get("take_profit", 0.0)),
            stop_loss=float(data.get("stop_loss", 0.0)),
            execution_type=data.get("execution_type", ""),
            status=data.get("status", ""),
        )


@dataclass(frozen=True, slots=True)
class FilterCriteria:
    """Filter for the working trade subset.

    Attributes:
        start: First calendar date to include (None for no lower bound)
        end: Last calendar date to include (None for no upper bound)
        direction: "all", "Long" or "Short"
        instrument: "all" or an instrument name
    """

    start: date | None = None
    end: date | None = None
    direction: str = ALL
    instrument: str = ALL

    def __post_init__(self) -> None:
        """Validate direction value."""
        allowed = (ALL, Direction.LONG.value, Direction.SHORT.value)
        direction = self.direction.value if isinstance(self.direction, Direction) else self.direction
        if direction not in allowed:
            raise ValueError(f"direction must be one of {allowed}, got: {self.direction}")
        object.__setattr__(self, "direction", direction)

    @property
    def is_empty(self) -> bool:
        """True when no constraint is imposed."""
        return (
            self.start is None
            and self.end is None
            and self.direction == ALL
            and self.instrument == ALL
        )


@dataclass(frozen=True, slots=True)
class SortConfig:
    """Ordering of the trade log.

    Example:
        >>> config = SortConfig()
        >>> config.toggle(SortKey.TIMESTAMP).direction
        'asc'
        >>> config.toggle(SortKey.PRICE).direction
        'desc'
    """

    key: SortKey = SortKey.TIMESTAMP
    direction: SortDirection = "desc"

    def __post_init__(self) -> None:
        if not isinstance(self.key, SortKey):
            object.__setattr__(self, "key", SortKey(self.key))
        if self.direction not in ("asc", "desc"):
            raise ValueError(f"direction must be 'asc' or 'desc', got: {self.direction}")

    @property
    def ascending(self) -> bool:
        return self.direction == "asc"

    def toggle(self, key: SortKey | str) -> SortConfig:
        """Select a column: same key flips direction, a new key sorts descending."""
        key = SortKey(key)
        if key == self.key:
            return replace(self, direction="asc" if self.direction == "desc" else "desc")
        return SortConfig(key=key, direction="desc")
