"""Unit tests for domain/metrics/aggregation.py."""

from datetime import datetime

import polars as pl
import pytest

from trade_analytics.domain.models import Direction
from trade_analytics.domain.metrics import WEEKDAYS, compute_aggregations


@pytest.fixture
def trades(make_trade):
    """Mixed set across months, weekdays, hours and instruments."""
    return [
        # Monday 2024-01-15
        make_trade(10, timestamp=datetime(2024, 1, 15, 9, 5), instrument="US100"),
        make_trade(-4, timestamp=datetime(2024, 1, 15, 14, 0), instrument="GOLD",
                   direction=Direction.SHORT),
        # Wednesday 2024-01-17
        make_trade(6, timestamp=datetime(2024, 1, 17, 9, 45), instrument="US100"),
        # Saturday 2024-02-03
        make_trade(-2, timestamp=datetime(2024, 2, 3, 23, 10), instrument="BTCUSD"),
        # Sunday 2023-12-31 (earlier month, listed last in input)
        make_trade(0, timestamp=datetime(2023, 12, 31, 10, 0), instrument="GOLD", fee=1.0),
    ]


class TestMonthly:
    """Tests for monthly view."""

    def test_keys_chronological(self, trades):
        views = compute_aggregations(trades)
        assert [m.month for m in views.monthly] == ["2023-12", "2024-01", "2024-02"]

    def test_values(self, trades):
        jan = compute_aggregations(trades).monthly[1]
        assert jan.pnl == pytest.approx(12.0)
        assert jan.trades == 3
        assert jan.winners == 2
        assert jan.losers == 1
        assert jan.win_rate == pytest.approx(200 / 3)

    def test_zero_trade_month(self, trades):
        dec = compute_aggregations(trades).monthly[0]
        assert dec.trades == 1
        assert dec.winners == 0
        assert dec.losers == 0
        assert dec.win_rate == 0.0


class TestWeekday:
    """Tests for weekday view."""

    def test_only_active_days_in_order(self, trades):
        views = compute_aggregations(trades)
        assert [d.day for d in views.weekday] == ["Mon", "Wed", "Sat", "Sun"]

    def test_values(self, trades):
        monday = compute_aggregations(trades).weekday[0]
        assert monday.pnl == pytest.approx(6.0)
        assert monday.trades == 2

    def test_weekday_labels(self):
        assert WEEKDAYS[0] == "Mon"
        assert WEEKDAYS[-1] == "Sun"


class TestHourly:
    """Tests for hourly view."""

    def test_numeric_order(self, trades):
        views = compute_aggregations(trades)
        assert [h.hour for h in views.hourly] == [9, 10, 14, 23]

    def test_values_and_label(self, trades):
        nine = compute_aggregations(trades).hourly[0]
        assert nine.pnl == pytest.approx(16.0)
        assert nine.trades == 2
        assert nine.label == "9:00"


class TestDirection:
    """Tests for direction view."""

    def test_both_entries(self, trades):
        long_, short = compute_aggregations(trades).direction
        assert long_.name == "Long"
        assert long_.trades == 4
        assert long_.pnl == pytest.approx(14.0)
        assert long_.win_rate == pytest.approx(50.0)
        assert short.name == "Short"
        assert short.trades == 1
        assert short.win_rate == 0.0

    def test_empty_side_still_reported(self, make_trade):
        views = compute_aggregations([make_trade(5)])
        assert [d.name for d in views.direction] == ["Long", "Short"]
        assert views.direction[1].trades == 0
        assert views.direction[1].pnl == 0.0
        assert views.direction[1].win_rate == 0.0


class TestInstrument:
    """Tests for instrument view."""

    def test_first_seen_order(self, trades):
        views = compute_aggregations(trades)
        assert [i.name for i in views.instrument] == ["US100", "GOLD", "BTCUSD"]

    def test_values(self, trades):
        gold = compute_aggregations(trades).instrument[1]
        assert gold.pnl == pytest.approx(-4.0)
        assert gold.trades == 2
        assert gold.winners == 0
        assert gold.losers == 1
        assert gold.win_rate == 0.0


class TestAggregationViews:
    """Tests for the bundle."""

    def test_empty_input(self):
        views = compute_aggregations([])
        assert views.monthly == ()
        assert views.weekday == ()
        assert views.hourly == ()
        assert views.instrument == ()
        assert len(views.direction) == 2

    def test_to_frame(self, trades):
        df = compute_aggregations(trades).to_frame("instrument")
        assert isinstance(df, pl.DataFrame)
        assert df.columns == ["name", "pnl", "trades", "winners", "losers", "win_rate"]
        assert df["name"].to_list() == ["US100", "GOLD", "BTCUSD"]

    def test_to_frame_unknown(self, trades):
        with pytest.raises(ValueError, match="Unknown view"):
            compute_aggregations(trades).to_frame("yearly")

    def test_immutable(self, trades):
        views = compute_aggregations(trades)
        with pytest.raises(AttributeError):
            views.monthly = ()
