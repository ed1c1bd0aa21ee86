"""Application Services for Trade Analytics.

Services orchestrate parsing, repositories and domain logic to
implement use cases.

Available services:
- TradeJournalService: Load, persist, recompute and export the journal
"""

from trade_analytics.application.services.journal import (
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
