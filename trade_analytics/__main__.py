"""Entry point for running trade_analytics as a module.

Usage:
    python -m trade_analytics [command] [options]

Commands:
    summary     Headline performance metrics
    breakdown   Grouped P&L views
    trades      Searched and sorted trade log
    export      Export the trade log as CSV

Examples:
    python -m trade_analytics summary export.csv
    python -m trade_analytics breakdown export.csv --by weekday
    python -m trade_analytics trades export.csv --search us100 --sort net_pnl
    python -m trade_analytics export export.csv -o log.csv
"""

import sys

from trade_analytics.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
