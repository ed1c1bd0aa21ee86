"""Command Line Interface for Trade Analytics.

Provides CLI access to the journal:
- load: Import a broker export into the local store
- clear: Delete the stored trades
- summary: Headline performance metrics
- breakdown: Grouped P&L views
- trades: Searched and sorted trade log
- export: Export the trade log as CSV

Commands that read trades take an optional FILE; without it the
stored trades are used.

Usage:
    python -m trade_analytics load FILE
    python -m trade_analytics summary [FILE] [--start DATE] [--end DATE]
    python -m trade_analytics breakdown [FILE] --by weekday
    python -m trade_analytics trades [FILE] --search us100 --sort net_pnl --asc
    python -m trade_analytics export [FILE] -o log.csv
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from trade_analytics import __version__
from trade_analytics.domain import ALL, FilterCriteria, SortConfig, SortKey
from trade_analytics.domain.metrics import VIEW_NAMES
from trade_analytics.infrastructure import (
    DEFAULT_CONFIG,
    DEFAULT_PATHS,
    FileKeyValueStore,
    TradeLoadError,
    TradeRepository,
)
from trade_analytics.application import JournalState, TradeJournalService


def _service() -> TradeJournalService:
    repository = TradeRepository(FileKeyValueStore(DEFAULT_PATHS), key=DEFAULT_CONFIG.storage_key)
    return TradeJournalService(repository=repository, config=DEFAULT_CONFIG, paths=DEFAULT_PATHS)


def _filters(args: argparse.Namespace) -> FilterCriteria:
    return FilterCriteria(
        start=args.start,
        end=args.end,
        direction=args.direction,
        instrument=args.instrument,
    )


def _load_state(service: TradeJournalService, args: argparse.Namespace) -> JournalState | None:
    """Trades from FILE (or the store) with the command's filters.

    Prints the error and returns None when loading fails.
    """
    state = JournalState(filters=_filters(args))
    if args.file is None:
        state = service.restore(state)
        if state.is_empty:
            print("No stored trades. Run `load FILE` or pass a FILE.")
            return None
        return state

    # Reading a FILE never replaces the stored trades
    reader = TradeJournalService(config=DEFAULT_CONFIG, paths=DEFAULT_PATHS)
    try:
        result = reader.load_file(state, args.file)
    except TradeLoadError as e:
        print(f"Error loading CSV: {e}")
        return None

    if result.skipped_rows:
        print(f"Skipped {result.skipped_rows} invalid rows")
    return result.state


def _money(value: float) -> str:
    return f"${value:,.2f}"


def _ratio(value: float) -> str:
    return "∞" if value >= DEFAULT_CONFIG.ratio_sentinel else f"{value:.2f}"


def cmd_load(args: argparse.Namespace) -> int:
    """Import a broker export into the store."""
    service = _service()
    try:
        result = service.load_file(JournalState(), args.file)
    except TradeLoadError as e:
        print(f"Error loading CSV: {e}")
        return 1

    print(f"Loaded {result.trade_count} completed trades")
    if result.parsed.pending_rows:
        print(f"Ignored {result.parsed.pending_rows} pending trades (P&L = 0)")
    if result.skipped_rows:
        print(f"Skipped {result.skipped_rows} invalid rows")
    if not result.persisted:
        print("Storage not available, data will not persist")
    return 0


def cmd_clear(args: argparse.Namespace) -> int:
    """Delete the stored trades."""
    service = _service()
    service.clear(JournalState())
    print("Trading data cleared")
    return 0


def cmd_summary(args: argparse.Namespace) -> int:
    """Show headline metrics."""
    service = _service()
    state = _load_state(service, args)
    if state is None:
        return 1

    view = service.dashboard(state)
    m = view.metrics
    print(f"Trade Analytics v{__version__}")
    print("=" * 50)
    if m is None:
        print("No trades match the current filters")
        return 0

    print("【P&L】")
    print(f"  Total P&L:        {_money(m.total_pnl)}")
    print(f"  Total fees:       {_money(m.total_fees)}")
    print(f"  Expectancy:       {_money(m.expectancy)}")
    print()

    print("【Win Rate】")
    print(f"  Trades:           {m.total_trades:,} ({m.winners}W / {m.losers}L)")
    print(f"  Win rate:         {m.win_rate:.1f}%")
    print(f"  Avg win / loss:   {_money(m.avg_win)} / {_money(m.avg_loss)}")
    print(f"  Profit factor:    {_ratio(m.profit_factor)}")
    print(f"  Risk/Reward:      1:{_ratio(m.risk_reward)}")
    print()

    print("【Risk】")
    print(f"  Max drawdown:     {_money(m.max_drawdown)} ({m.max_drawdown_percent:.1f}% from peak)")
    print(f"  Recovery factor:  {_ratio(m.recovery_factor)}")
    print(f"  Avg duration:     {m.avg_trade_duration_minutes:.1f} min")
    print(f"  Streaks:          {m.max_win_streak} wins / {m.max_loss_streak} losses")
    current = f"{abs(m.current_streak)} " + ("wins" if m.is_on_win_streak else "losses")
    print(f"  Current streak:   {current}")
    print()

    print("【Best Trades】")
    for trade in m.best_trades:
        print(f"  {trade.timestamp_text:<22} {trade.instrument:<12} {_money(trade.net_pnl):>12}")
    print("【Worst Trades】")
    for trade in m.worst_trades:
        print(f"  {trade.timestamp_text:<22} {trade.instrument:<12} {_money(trade.net_pnl):>12}")

    return 0


def cmd_breakdown(args: argparse.Namespace) -> int:
    """Show a grouped view."""
    service = _service()
    state = _load_state(service, args)
    if state is None:
        return 1

    view = service.dashboard(state)
    df = view.aggregations.to_frame(args.by)

    print(f"【{args.by.capitalize()} Performance】")
    print("-" * 50)
    if len(df) == 0:
        print("  No trades")
    else:
        for row in df.iter_rows(named=True):
            label = row.get("month") or row.get("day") or row.get("name")
            if args.by == "hourly":
                label = f"{row['hour']}:00"
            line = f"  {label:<14} {_money(row['pnl']):>14} {row['trades']:>6} trades"
            if "win_rate" in row:
                line += f"  {row['win_rate']:5.1f}%"
            print(line)

    if args.save:
        try:
            saved = service.save_views(
                view,
                base_name=args.output,
                formats=tuple(f.strip() for f in args.formats.split(",")),
                views=(args.by,),
            )
        except ValueError as e:
            print(f"Error saving report: {e}")
            return 1
        print()
        for path in saved:
            print(f"Saved: {path}")

    return 0


def cmd_trades(args: argparse.Namespace) -> int:
    """Show the trade log."""
    service = _service()
    state = _load_state(service, args)
    if state is None:
        return 1

    sort = SortConfig(key=SortKey(args.sort), direction="asc" if args.asc else "desc")
    state = JournalState(trades=state.trades, filters=state.filters, sort=sort, search=args.search)
    rows = service.log_view(state)

    print(f"{'Date':<22} {'Instrument':<12} {'Dir':<6} {'Qty':>8} {'Price':>10} {'Net P&L':>12}")
    print("-" * 74)
    for trade in rows[: args.limit]:
        print(f"{trade.timestamp_text:<22} {trade.instrument:<12} {trade.direction.value:<6} "
              f"{trade.quantity:>8g} {trade.price:>10.2f} {trade.net_pnl:>12.2f}")
    if len(rows) > args.limit:
        print(f"... {len(rows) - args.limit} more trades")

    return 0


def cmd_export(args: argparse.Namespace) -> int:
    """Export the trade log as CSV."""
    service = _service()
    state = _load_state(service, args)
    if state is None:
        return 1

    sort = SortConfig(key=SortKey(args.sort), direction="asc" if args.asc else "desc")
    state = JournalState(trades=state.trades, filters=state.filters, sort=sort, search=args.search)
    text = service.export_csv(state)

    output = Path(args.output or f"trading_analytics_{date.today().isoformat()}.csv")
    output.write_text(text + "\n", encoding="utf-8")
    print(f"Exported: {output}")
    return 0


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", nargs="?", type=Path, help="Broker CSV export (default: stored trades)")
    parser.add_argument("--start", type=date.fromisoformat, help="First date (YYYY-MM-DD)")
    parser.add_argument("--end", type=date.fromisoformat, help="Last date (YYYY-MM-DD)")
    parser.add_argument(
        "--direction",
        choices=[ALL, "Long", "Short"],
        default=ALL,
        help="Trade direction",
    )
    parser.add_argument("--instrument", default=ALL, help="Instrument name")


def _add_log_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-s", "--search", default="", help="Search instrument, id or direction")
    parser.add_argument(
        "--sort",
        choices=[k.value for k in SortKey],
        default=SortKey.TIMESTAMP.value,
        help="Sort column",
    )
    parser.add_argument("--asc", action="store_true", help="Sort ascending")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        prog="trade_analytics",
        description="Trade Analytics - Broker Export Performance Analysis",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # load command
    load_parser = subparsers.add_parser("load", help="Import a broker export")
    load_parser.add_argument("file", type=Path, help="Broker CSV export")

    # clear command
    subparsers.add_parser("clear", help="Delete stored trades")

    # summary command
    summary_parser = subparsers.add_parser("summary", help="Show headline metrics")
    _add_source_arguments(summary_parser)

    # breakdown command
    breakdown_parser = subparsers.add_parser("breakdown", help="Show grouped P&L")
    _add_source_arguments(breakdown_parser)
    breakdown_parser.add_argument("--by", choices=VIEW_NAMES, default="monthly", help="Grouping")
    breakdown_parser.add_argument("--save", action="store_true", help="Save the view")
    breakdown_parser.add_argument(
        "-o", "--output",
        default="trade_report",
        help="Report filename prefix",
    )
    breakdown_parser.add_argument(
        "-f", "--formats",
        default="csv",
        help="Output formats (comma-separated: csv,parquet)",
    )

    # trades command
    trades_parser = subparsers.add_parser("trades", help="Show the trade log")
    _add_source_arguments(trades_parser)
    _add_log_arguments(trades_parser)
    trades_parser.add_argument("-n", "--limit", type=int, default=50, help="Rows to show")

    # export command
    export_parser = subparsers.add_parser("export", help="Export the trade log as CSV")
    _add_source_arguments(export_parser)
    _add_log_arguments(export_parser)
    export_parser.add_argument("-o", "--output", help="Output CSV path")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "load": cmd_load,
        "clear": cmd_clear,
        "summary": cmd_summary,
        "breakdown": cmd_breakdown,
        "trades": cmd_trades,
        "export": cmd_export,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
