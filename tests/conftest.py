"""Shared fixtures for trade analytics tests."""

from datetime import datetime

import pytest

from trade_analytics.domain.models import Direction, Trade


SCENARIO_A_CSV = (
    "Trade Id,Instrument Symbol,Quantity,Price,Rpl Converted,Fee,Swap Converted,Timestamp\n"
    "T1,US100,-2,100,50,5,1,2024-01-15T10:00:00\n"
    "T2,US100,3,90,-20,2,0,2024-01-15T11:30:00\n"
)


@pytest.fixture
def scenario_a_csv() -> str:
    """Two trades: a 46 winner then a 22 loser."""
    return SCENARIO_A_CSV


@pytest.fixture
def make_trade():
    """Factory for trades with a given net P&L (fee 0, swap 0)."""
    counter = {"n": 0}

    def _make(
        net_pnl: float,
        timestamp: datetime = datetime(2024, 1, 15, 10, 0),
        instrument: str = "US100",
        direction: Direction = Direction.LONG,
        fee: float = 0.0,
        id: str | None = None,
        quantity: float = 1.0,
        price: float = 100.0,
    ) -> Trade:
        counter["n"] += 1
        return Trade(
            id=id or f"T{counter['n']}",
            instrument=instrument,
            direction=direction,
            quantity=quantity,
            price=price,
            gross_pnl=net_pnl + fee,
            timestamp=timestamp,
            fee=fee,
        )

    return _make
