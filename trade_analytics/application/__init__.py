"""Application Layer: Use cases and service orchestration.

This layer contains:
- services/: Business logic orchestration
  - journal.py: Trade journal load / dashboard / export
"""

from trade_analytics.application.services import (
    JournalState,
    LoadResult,
    DashboardView,
    TradeJournalService,
)

__all__ = [
    "JournalState",
    "LoadResult",
    "DashboardView",
    "TradeJournalService",
]
