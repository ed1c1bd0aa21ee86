"""Aggregation: Grouped P&L views for charts and tables.

Every view is an independent group-by over the same filtered trades:
- monthly: YYYY-MM buckets in chronological order
- weekday: Mon..Sun, active days only
- hourly: 0-23, active hours only, numeric order
- direction: always Long and Short
- instrument: one row per instrument, first-seen order

Calendar keys use the trade's local wall time.
"""

from dataclasses import asdict, dataclass
from typing import Sequence

import polars as pl

from trade_analytics.domain.models import Direction, Trade

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

VIEW_NAMES = ("monthly", "weekday", "hourly", "direction", "instrument")


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True, slots=True)
class MonthlyStat:
    month: str  # "2024-01"
    pnl: float
    trades: int
    winners: int
    losers: int
    win_rate: float


@dataclass(frozen=True, slots=True)
class WeekdayStat:
    day: str  # "Mon"
    pnl: float
    trades: int


@dataclass(frozen=True, slots=True)
class HourStat:
    hour: int
    pnl: float
    trades: int

    @property
    def label(self) -> str:
        """Display label, e.g. "9:00"."""
        return f"{self.hour}:00"


@dataclass(frozen=True, slots=True)
class DirectionStat:
    name: str  # "Long" / "Short"
    pnl: float
    trades: int
    win_rate: float


@dataclass(frozen=True, slots=True)
class InstrumentStat:
    name: str
    pnl: float
    trades: int
    winners: int
    losers: int
    win_rate: float


@dataclass(frozen=True, slots=True)
class AggregationViews:
    """All grouped views for one filtered trade set."""
    monthly: tuple[MonthlyStat, ...]
    weekday: tuple[WeekdayStat, ...]
    hourly: tuple[HourStat, ...]
    direction: tuple[DirectionStat, ...]
    instrument: tuple[InstrumentStat, ...]

    def to_frame(self, view: str) -> pl.DataFrame:
        """Export one view as a DataFrame.

        Args:
            view: One of VIEW_NAMES

        Raises:
            ValueError: If the view name is unknown
        """
        if view not in VIEW_NAMES:
            raise ValueError(f"Unknown view: {view}")
        rows = [asdict(row) for row in getattr(self, view)]
        if not rows:
            return pl.DataFrame()
        return pl.DataFrame(rows)


# =============================================================================
# Frame Construction
# =============================================================================

def trades_to_frame(trades: Sequence[Trade]) -> pl.DataFrame:
    """Columns needed by the group-bys, one row per trade in input order."""
    return pl.DataFrame(
        {
            "timestamp": [t.timestamp for t in trades],
            "instrument": [t.instrument for t in trades],
            "direction": [t.direction.value for t in trades],
            "pnl": [t.net_pnl for t in trades],
        },
        schema={
            "timestamp": pl.Datetime("us"),
            "instrument": pl.Utf8,
            "direction": pl.Utf8,
            "pnl": pl.Float64,
        },
    )


def _win_rate(winners: int, trades: int) -> float:
    return winners / trades * 100 if trades > 0 else 0.0


def _outcome_aggs() -> list[pl.Expr]:
    return [
        pl.col("pnl").sum().alias("pnl"),
        pl.len().alias("trades"),
        (pl.col("pnl") > 0).sum().alias("winners"),
        (pl.col("pnl") < 0).sum().alias("losers"),
    ]


# =============================================================================
# Views
# =============================================================================

def monthly_performance(df: pl.DataFrame) -> list[MonthlyStat]:
    """P&L, trade count and win rate per calendar month."""
    agg = (
        df.with_columns(pl.col("timestamp").dt.strftime("%Y-%m").alias("month"))
        .group_by("month")
        .agg(_outcome_aggs())
        .sort("month")
    )
    return [
        MonthlyStat(
            month=row["month"],
            pnl=float(row["pnl"]),
            trades=int(row["trades"]),
            winners=int(row["winners"]),
            losers=int(row["losers"]),
            win_rate=_win_rate(int(row["winners"]), int(row["trades"])),
        )
        for row in agg.iter_rows(named=True)
    ]


def weekday_performance(df: pl.DataFrame) -> list[WeekdayStat]:
    """P&L and trade count per weekday, Mon to Sun, active days only."""
    agg = (
        df.with_columns(pl.col("timestamp").dt.weekday().alias("weekday"))
        .group_by("weekday")
        .agg(
            pl.col("pnl").sum().alias("pnl"),
            pl.len().alias("trades"),
        )
        .sort("weekday")
    )
    # polars weekday: Monday=1 ... Sunday=7
    return [
        WeekdayStat(
            day=WEEKDAYS[int(row["weekday"]) - 1],
            pnl=float(row["pnl"]),
            trades=int(row["trades"]),
        )
        for row in agg.iter_rows(named=True)
    ]


def hourly_performance(df: pl.DataFrame) -> list[HourStat]:
    """P&L and trade count per hour of day, active hours only."""
    agg = (
        df.with_columns(pl.col("timestamp").dt.hour().cast(pl.Int32).alias("hour"))
        .group_by("hour")
        .agg(
            pl.col("pnl").sum().alias("pnl"),
            pl.len().alias("trades"),
        )
        .sort("hour")
    )
    return [
        HourStat(hour=int(row["hour"]), pnl=float(row["pnl"]), trades=int(row["trades"]))
        for row in agg.iter_rows(named=True)
    ]


def direction_performance(df: pl.DataFrame) -> list[DirectionStat]:
    """Long and Short summaries; both are always present."""
    agg = df.group_by("direction").agg(_outcome_aggs())
    by_name = {row["direction"]: row for row in agg.iter_rows(named=True)}

    stats = []
    for direction in (Direction.LONG, Direction.SHORT):
        row = by_name.get(direction.value)
        if row is None:
            stats.append(DirectionStat(name=direction.value, pnl=0.0, trades=0, win_rate=0.0))
            continue
        stats.append(
            DirectionStat(
                name=direction.value,
                pnl=float(row["pnl"]),
                trades=int(row["trades"]),
                win_rate=_win_rate(int(row["winners"]), int(row["trades"])),
            )
        )
    return stats


def instrument_performance(df: pl.DataFrame) -> list[InstrumentStat]:
    """Per-instrument P&L and win/loss counts, in first-seen order."""
    agg = df.group_by("instrument", maintain_order=True).agg(_outcome_aggs())
    return [
        InstrumentStat(
            name=row["instrument"],
            pnl=float(row["pnl"]),
            trades=int(row["trades"]),
            winners=int(row["winners"]),
            losers=int(row["losers"]),
            win_rate=_win_rate(int(row["winners"]), int(row["trades"])),
        )
        for row in agg.iter_rows(named=True)
    ]


def compute_aggregations(trades: Sequence[Trade]) -> AggregationViews:
    """Compute all grouped views for a filtered trade sequence.

    Example:
        >>> views = compute_aggregations(trades)
        >>> [d.name for d in views.direction]
        ['Long', 'Short']
    """
    df = trades_to_frame(trades)
    return AggregationViews(
        monthly=tuple(monthly_performance(df)),
        weekday=tuple(weekday_performance(df)),
        hourly=tuple(hourly_performance(df)),
        direction=tuple(direction_performance(df)),
        instrument=tuple(instrument_performance(df)),
    )
