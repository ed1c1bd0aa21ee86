"""Configuration: Centralized paths and settings.

This module provides:
- DataPaths: File paths for persisted trades and saved reports
- AnalysisConfig: Parameters for the metrics engine and persistence

Directory Structure:
    data/
    ├── store/                   # Key/value store (one file per key)
    │   └── trading-data.json
    └── reports/                 # Saved aggregation views
        ├── monthly.csv
        └── ...
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DataPaths:
    """File paths for data sources.

    Attributes:
        root: Project root directory
    """

    root: Path = Path(".")

    # --- Directories ---

    @property
    def data_dir(self) -> Path:
        """Main data directory."""
        return self.root / "data"

    @property
    def store_dir(self) -> Path:
        """Key/value store directory."""
        return self.data_dir / "store"

    @property
    def reports_dir(self) -> Path:
        """Saved report tables."""
        return self.data_dir / "reports"

    # --- Helper Methods ---

    def store_path(self, key: str) -> Path:
        """Path of the file holding a store key."""
        return self.store_dir / f"{key}.json"

    def report_path(self, name: str, fmt: str) -> Path:
        """Path of a saved report table."""
        return self.reports_dir / f"{name}.{fmt}"

    def ensure_dirs(self) -> None:
        """Create all required directories."""
        self.store_dir.mkdir(parents=True, exist_ok=True)
        self.reports_dir.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for analysis algorithms.

    Attributes:
        ratio_sentinel: Ratio reported when the denominator is zero
            and the numerator positive (shown as "infinite")
        top_trades: Size of the best/worst trade lists
        max_gap_hours: Gaps at or above this are excluded from the
            average trade duration
        storage_key: Store key for the persisted trade list
    """

    ratio_sentinel: float = 999.0
    top_trades: int = 5
    max_gap_hours: float = 24.0
    storage_key: str = "trading-data"


# Default instances
DEFAULT_PATHS = DataPaths()
DEFAULT_CONFIG = AnalysisConfig()
