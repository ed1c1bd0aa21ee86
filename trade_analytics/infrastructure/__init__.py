"""Infrastructure layer for Trade Analytics.

Contains:
- config: Data paths and analysis configuration
- errors: Load error taxonomy
- csv_parser / csv_export: Broker export import and trade log export
- repositories: Persistence abstractions
"""

from trade_analytics.infrastructure.config import (
    DataPaths,
    AnalysisConfig,
    DEFAULT_PATHS,
    DEFAULT_CONFIG,
)
from trade_analytics.infrastructure.errors import (
    TradeLoadError,
    EmptyInputError,
    MissingColumnsError,
    NoCompletedTradesError,
    ReadFailureError,
)
from trade_analytics.infrastructure.csv_parser import (
    REQUIRED_COLUMNS,
    ParseResult,
    split_csv_line,
    parse_trades_csv,
)
from trade_analytics.infrastructure.csv_export import (
    EXPORT_HEADER,
    export_trades_csv,
)
from trade_analytics.infrastructure.repositories import (
    Repository,
    RepositoryError,
    KeyValueStore,
    MemoryKeyValueStore,
    FileKeyValueStore,
    TradeRepository,
)

__all__ = [
    # Config
    "DataPaths",
    "AnalysisConfig",
    "DEFAULT_PATHS",
    "DEFAULT_CONFIG",
    # Errors
    "TradeLoadError",
    "EmptyInputError",
    "MissingColumnsError",
    "NoCompletedTradesError",
    "ReadFailureError",
    # CSV
    "REQUIRED_COLUMNS",
    "ParseResult",
    "split_csv_line",
    "parse_trades_csv",
    "EXPORT_HEADER",
    "export_trades_csv",
    # Repositories
    "Repository",
    "RepositoryError",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "FileKeyValueStore",
    "TradeRepository",
]
