"""Unit tests for interfaces/cli.py.

Tests verify:
1. CLI commands execute without errors
2. Output format is correct
3. Error handling works properly

Every test runs in a temporary working directory so the file store
under data/ never leaks between tests.
"""

from pathlib import Path

import pytest

from trade_analytics import __version__
from trade_analytics.interfaces.cli import main


@pytest.fixture(autouse=True)
def workdir(tmp_path, monkeypatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def export_file(workdir, scenario_a_csv) -> Path:
    path = workdir / "export.csv"
    path.write_text(scenario_a_csv, encoding="utf-8")
    return path


class TestCliBasic:
    """Basic CLI tests."""

    def test_version(self, capsys):
        """--version should show version."""
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_help(self, capsys):
        """No command should show help."""
        result = main([])
        assert result == 0
        assert "summary" in capsys.readouterr().out

    def test_invalid_command(self):
        """Invalid command should fail."""
        with pytest.raises(SystemExit):
            main(["invalid_command"])

    def test_invalid_sort_key(self, export_file):
        with pytest.raises(SystemExit):
            main(["trades", str(export_file), "--sort", "volume"])


class TestLoadCommand:
    """Tests for load and clear commands."""

    def test_load_then_summary(self, export_file, workdir, capsys):
        """Stored trades are used when no FILE is given."""
        assert main(["load", str(export_file)]) == 0
        assert "Loaded 2 completed trades" in capsys.readouterr().out
        assert (workdir / "data" / "store" / "trading-data.json").exists()

        assert main(["summary"]) == 0
        assert "$24.00" in capsys.readouterr().out

    def test_load_reports_pending_and_skipped(self, workdir, capsys):
        path = workdir / "mixed.csv"
        path.write_text(
            "Trade Id,Quantity,Price,Rpl Converted,Timestamp\n"
            "T1,1,10,5,2024-01-15T10:00:00\n"
            "T2,1,10,0,2024-01-15T11:00:00\n"
            "T3,x,10,5,2024-01-15T12:00:00\n",
            encoding="utf-8",
        )
        assert main(["load", str(path)]) == 0
        out = capsys.readouterr().out
        assert "Loaded 1 completed trades" in out
        assert "Ignored 1 pending trades" in out
        assert "Skipped 1 invalid rows" in out

    def test_load_missing_columns(self, workdir, capsys):
        path = workdir / "bad.csv"
        path.write_text("Trade Id,Quantity,Cost,Timestamp\nT1,1,10,2024-01-15\n", encoding="utf-8")
        assert main(["load", str(path)]) == 1
        out = capsys.readouterr().out
        assert "Error loading CSV" in out
        assert "Price" in out

    def test_load_missing_file(self, workdir, capsys):
        assert main(["load", str(workdir / "nope.csv")]) == 1
        assert "Error loading CSV" in capsys.readouterr().out

    def test_clear(self, export_file, capsys):
        main(["load", str(export_file)])
        assert main(["clear"]) == 0
        capsys.readouterr()

        assert main(["summary"]) == 1
        assert "No stored trades" in capsys.readouterr().out

    def test_reading_file_keeps_store(self, export_file, workdir):
        main(["summary", str(export_file)])
        assert not (workdir / "data" / "store" / "trading-data.json").exists()


class TestSummaryCommand:
    """Tests for summary command."""

    def test_summary(self, export_file, capsys):
        assert main(["summary", str(export_file)]) == 0
        out = capsys.readouterr().out
        assert "Total P&L:" in out
        assert "$24.00" in out
        assert "(1W / 1L)" in out
        assert "50.0%" in out
        assert "$22.00" in out
        assert "Current streak:   1 losses" in out

    def test_summary_infinite_ratio(self, workdir, capsys):
        path = workdir / "wins.csv"
        path.write_text(
            "Trade Id,Quantity,Price,Rpl Converted,Timestamp\n"
            "T1,1,10,5,2024-01-15T10:00:00\n",
            encoding="utf-8",
        )
        assert main(["summary", str(path)]) == 0
        assert "∞" in capsys.readouterr().out

    def test_summary_filtered_to_nothing(self, export_file, capsys):
        assert main(["summary", str(export_file), "--start", "2030-01-01"]) == 0
        assert "No trades match" in capsys.readouterr().out

    def test_summary_no_store(self, capsys):
        assert main(["summary"]) == 1
        assert "No stored trades" in capsys.readouterr().out


class TestBreakdownCommand:
    """Tests for breakdown command."""

    def test_monthly(self, export_file, capsys):
        assert main(["breakdown", str(export_file)]) == 0
        out = capsys.readouterr().out
        assert "Monthly Performance" in out
        assert "2024-01" in out

    def test_hourly(self, export_file, capsys):
        assert main(["breakdown", str(export_file), "--by", "hourly"]) == 0
        out = capsys.readouterr().out
        assert "10:00" in out
        assert "11:00" in out

    def test_direction_filter(self, export_file, capsys):
        assert main(["breakdown", str(export_file), "--by", "direction", "--direction", "Short"]) == 0
        out = capsys.readouterr().out
        assert "Short" in out
        assert "$46.00" in out

    def test_save(self, export_file, workdir, capsys):
        assert main(["breakdown", str(export_file), "--by", "weekday", "--save", "-o", "rep"]) == 0
        assert (workdir / "data" / "reports" / "rep_weekday.csv").exists()
        assert "Saved:" in capsys.readouterr().out

    def test_save_unknown_format(self, export_file, workdir, capsys):
        result = main(["breakdown", str(export_file), "--save", "-o", "rep", "-f", "csv,xlsx"])
        assert result == 1
        assert "Unknown format: xlsx" in capsys.readouterr().out
        assert not (workdir / "data" / "reports" / "rep_monthly.csv").exists()


class TestTradesCommand:
    """Tests for trades command."""

    def test_default_order(self, export_file, capsys):
        assert main(["trades", str(export_file)]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[2].startswith("2024-01-15T11:30:00")
        assert lines[3].startswith("2024-01-15T10:00:00")

    def test_sort_ascending_by_pnl(self, export_file, capsys):
        assert main(["trades", str(export_file), "--sort", "net_pnl", "--asc"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[2].rstrip().endswith("-22.00")

    def test_search_and_limit(self, export_file, capsys):
        assert main(["trades", str(export_file), "-s", "long"]) == 0
        out = capsys.readouterr().out
        assert "Long" in out
        assert "Short" not in out

        assert main(["trades", str(export_file), "-n", "1"]) == 0
        assert "... 1 more trades" in capsys.readouterr().out


class TestExportCommand:
    """Tests for export command."""

    def test_export(self, export_file, workdir, capsys):
        output = workdir / "log.csv"
        assert main(["export", str(export_file), "-o", str(output)]) == 0
        lines = output.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "Date,Instrument,Direction,Quantity,Price,P&L,Fees,Net P&L"
        assert len(lines) == 3
        assert "Exported:" in capsys.readouterr().out

    def test_export_default_name(self, export_file, workdir):
        assert main(["export", str(export_file)]) == 0
        assert len(list(workdir.glob("trading_analytics_*.csv"))) == 1
