"""Performance Metrics: Win/loss statistics, risk ratios and equity curve.

Computes a MetricsSnapshot from one filtered trade sequence:
- P&L totals and win/loss partition
- Profit factor, risk/reward, expectancy, recovery factor
- Equity curve with running peak and drawdown
- Average gap between consecutive trades
- Best/worst trades and win/loss streaks

Degenerate ratios (zero denominator) use a fixed sentinel:
    ratio = num / den        if den > 0
          = SENTINEL (999)   if den == 0 and num > 0
          = 0                otherwise

Note on zero-P&L trades:
    A trade with net P&L == 0 is neither a winner nor a loser for
    win_rate / loss_rate, but it extends a losing streak.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

import numpy as np

from trade_analytics.domain.models import Trade

RATIO_SENTINEL = 999.0
TOP_TRADES = 5
MAX_GAP_HOURS = 24.0


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True, slots=True)
class EquityPoint:
    """One point of the equity curve (one trade in time order).

    Attributes:
        timestamp: Trade execution time
        equity: Cumulative net P&L after this trade
        pnl: Net P&L of this trade
        peak: Highest equity seen so far (never below 0)
        drawdown: peak - equity
        drawdown_percent: drawdown / peak * 100 (0 if peak <= 0)
    """
    timestamp: datetime
    equity: float
    pnl: float
    peak: float
    drawdown: float
    drawdown_percent: float


@dataclass(frozen=True, slots=True)
class StreakResult:
    """Longest consecutive runs in time order."""
    max_win_streak: int
    max_loss_streak: int
    current_streak: int

    @property
    def is_on_win_streak(self) -> bool:
        return self.current_streak > 0


@dataclass(frozen=True, slots=True)
class MetricsSnapshot:
    """Immutable analytics bundle for one filtered trade set.

    Percent values (win_rate, loss_rate, max_drawdown_percent) are in
    0-100 units. Trade lists are tuples so the snapshot cannot be edited.
    """
    # Counts
    total_trades: int
    winners: int
    losers: int

    # P&L
    total_pnl: float
    total_fees: float
    gross_profit: float
    gross_loss: float

    # Rates
    win_rate: float
    loss_rate: float
    avg_win: float
    avg_loss: float

    # Ratios
    profit_factor: float
    risk_reward: float
    expectancy: float
    recovery_factor: float

    # Equity / Drawdown
    max_drawdown: float
    max_drawdown_percent: float
    equity_curve: tuple[EquityPoint, ...]

    # Timing
    avg_trade_duration_minutes: float

    # Rankings
    best_trades: tuple[Trade, ...]
    worst_trades: tuple[Trade, ...]

    # Streaks
    max_win_streak: int
    max_loss_streak: int
    current_streak: int  # +N winning run, -N losing run

    @property
    def breakeven(self) -> int:
        """Trades with net P&L exactly 0."""
        return self.total_trades - self.winners - self.losers

    @property
    def is_on_win_streak(self) -> bool:
        return self.current_streak > 0

    @property
    def final_equity(self) -> float:
        return self.equity_curve[-1].equity if self.equity_curve else 0.0

    def to_dict(self) -> dict:
        """Scalar metrics as a dictionary (curve and rankings excluded)."""
        return {
            "total_trades": self.total_trades,
            "winners": self.winners,
            "losers": self.losers,
            "total_pnl": self.total_pnl,
            "total_fees": self.total_fees,
            "gross_profit": self.gross_profit,
            "gross_loss": self.gross_loss,
            "win_rate": self.win_rate,
            "loss_rate": self.loss_rate,
            "avg_win": self.avg_win,
            "avg_loss": self.avg_loss,
            "profit_factor": self.profit_factor,
            "risk_reward": self.risk_reward,
            "expectancy": self.expectancy,
            "recovery_factor": self.recovery_factor,
            "max_drawdown": self.max_drawdown,
            "max_drawdown_percent": self.max_drawdown_percent,
            "avg_trade_duration_minutes": self.avg_trade_duration_minutes,
            "max_win_streak": self.max_win_streak,
            "max_loss_streak": self.max_loss_streak,
            "current_streak": self.current_streak,
        }


# =============================================================================
# Building Blocks
# =============================================================================

def ratio_or_sentinel(
    numerator: float,
    denominator: float,
    sentinel: float = RATIO_SENTINEL,
) -> float:
    """Divide, falling back to a sentinel when the denominator is zero.

    Example:
        >>> ratio_or_sentinel(100.0, 50.0)
        2.0
        >>> ratio_or_sentinel(100.0, 0.0)
        999.0
        >>> ratio_or_sentinel(0.0, 0.0)
        0.0
    """
    if denominator > 0:
        return numerator / denominator
    if numerator > 0:
        return sentinel
    return 0.0


def sort_by_time(trades: Sequence[Trade]) -> list[Trade]:
    """Stable ascending sort by timestamp (ties keep input order)."""
    return sorted(trades, key=lambda t: t.timestamp)


def build_equity_curve(time_sorted: Sequence[Trade]) -> list[EquityPoint]:
    """Build the equity curve from trades already sorted by time.

    The running peak starts at 0, so a curve that never goes positive
    has drawdown measured from the starting balance.
    """
    if not time_sorted:
        return []

    pnl = np.array([t.net_pnl for t in time_sorted], dtype=float)
    equity = np.cumsum(pnl)
    peak = np.maximum.accumulate(np.maximum(equity, 0.0))
    drawdown = peak - equity
    drawdown_pct = np.divide(
        drawdown, peak, out=np.zeros_like(drawdown), where=peak > 0
    ) * 100

    return [
        EquityPoint(
            timestamp=trade.timestamp,
            equity=float(equity[i]),
            pnl=float(pnl[i]),
            peak=float(peak[i]),
            drawdown=float(drawdown[i]),
            drawdown_percent=float(drawdown_pct[i]),
        )
        for i, trade in enumerate(time_sorted)
    ]


def max_drawdown(curve: Sequence[EquityPoint]) -> tuple[float, float]:
    """Largest drawdown and the drawdown percent at that same point.

    The first occurrence wins when the maximum repeats.

    Returns:
        (max_drawdown, max_drawdown_percent), (0.0, 0.0) for a curve
        without any drawdown
    """
    if not curve:
        return 0.0, 0.0

    drawdowns = np.array([p.drawdown for p in curve])
    idx = int(np.argmax(drawdowns))
    if drawdowns[idx] <= 0:
        return 0.0, 0.0
    return float(drawdowns[idx]), curve[idx].drawdown_percent


def average_gap_minutes(
    time_sorted: Sequence[Trade],
    max_gap_hours: float = MAX_GAP_HOURS,
) -> float:
    """Average gap between consecutive trades, in minutes.

    Only gaps with 0 < gap < max_gap_hours are counted; duplicate
    timestamps and overnight gaps are ignored. All instruments share one
    chronological stream.
    """
    if len(time_sorted) < 2:
        return 0.0

    stamps = np.array([t.timestamp for t in time_sorted], dtype="datetime64[us]")
    gaps = np.diff(stamps) / np.timedelta64(1, "s")
    valid = gaps[(gaps > 0) & (gaps < max_gap_hours * 3600)]
    if valid.size == 0:
        return 0.0
    return float(valid.mean() / 60)


def calculate_streaks(time_sorted: Sequence[Trade]) -> StreakResult:
    """Longest win and loss runs.

    A positive counter tracks a winning run, a negative one a losing run.
    Net P&L <= 0 extends a losing run.
    """
    current = 0
    max_win = 0
    max_loss = 0

    for trade in time_sorted:
        if trade.net_pnl > 0:
            current = current + 1 if current > 0 else 1
            max_win = max(max_win, current)
        else:
            current = current - 1 if current < 0 else -1
            max_loss = max(max_loss, -current)

    return StreakResult(
        max_win_streak=max_win,
        max_loss_streak=max_loss,
        current_streak=current,
    )


def rank_trades(
    trades: Sequence[Trade],
    top_n: int = TOP_TRADES,
) -> tuple[list[Trade], list[Trade]]:
    """Best and worst trades by net P&L.

    Both lists come from one stable descending sort: best is its head,
    worst is its tail reversed (most negative first).
    """
    by_pnl = sorted(trades, key=lambda t: t.net_pnl, reverse=True)
    best = by_pnl[:top_n]
    worst = by_pnl[-top_n:][::-1] if top_n > 0 else []
    return best, worst


# =============================================================================
# Snapshot
# =============================================================================

def compute_metrics(
    trades: Sequence[Trade],
    sentinel: float = RATIO_SENTINEL,
    top_n: int = TOP_TRADES,
    max_gap_hours: float = MAX_GAP_HOURS,
) -> MetricsSnapshot | None:
    """Compute all performance metrics for a filtered trade sequence.

    Args:
        trades: Filtered trades (any order)
        sentinel: Value for ratios with a zero denominator and positive numerator
        top_n: Size of the best/worst trade lists
        max_gap_hours: Upper bound for gaps counted in the trade duration

    Returns:
        MetricsSnapshot, or None when there are no trades

    Example:
        >>> snapshot = compute_metrics(trades)
        >>> snapshot.win_rate
        50.0
    """
    if not trades:
        return None

    total = len(trades)
    net = [t.net_pnl for t in trades]
    wins = [p for p in net if p > 0]
    losses = [abs(p) for p in net if p < 0]

    total_pnl = sum(net)
    total_fees = sum(t.fee for t in trades)

    win_rate = len(wins) / total * 100
    loss_rate = len(losses) / total * 100
    avg_win = sum(wins) / len(wins) if wins else 0.0
    avg_loss = sum(losses) / len(losses) if losses else 0.0

    gross_profit = sum(wins)
    gross_loss = sum(losses)
    profit_factor = ratio_or_sentinel(gross_profit, gross_loss, sentinel)
    risk_reward = ratio_or_sentinel(avg_win, avg_loss, sentinel)

    # Expected value per trade
    expectancy = avg_win * (win_rate / 100) - avg_loss * (loss_rate / 100)

    # === Equity Curve ===
    time_sorted = sort_by_time(trades)
    curve = build_equity_curve(time_sorted)
    max_dd, max_dd_pct = max_drawdown(curve)
    recovery_factor = ratio_or_sentinel(total_pnl, max_dd, sentinel)

    avg_duration = average_gap_minutes(time_sorted, max_gap_hours)
    best, worst = rank_trades(trades, top_n)
    streaks = calculate_streaks(time_sorted)

    return MetricsSnapshot(
        total_trades=total,
        winners=len(wins),
        losers=len(losses),
        total_pnl=total_pnl,
        total_fees=total_fees,
        gross_profit=gross_profit,
        gross_loss=gross_loss,
        win_rate=win_rate,
        loss_rate=loss_rate,
        avg_win=avg_win,
        avg_loss=avg_loss,
        profit_factor=profit_factor,
        risk_reward=risk_reward,
        expectancy=expectancy,
        recovery_factor=recovery_factor,
        max_drawdown=max_dd,
        max_drawdown_percent=max_dd_pct,
        equity_curve=tuple(curve),
        avg_trade_duration_minutes=avg_duration,
        best_trades=tuple(best),
        worst_trades=tuple(worst),
        max_win_streak=streaks.max_win_streak,
        max_loss_streak=streaks.max_loss_streak,
        current_streak=streaks.current_streak,
    )
