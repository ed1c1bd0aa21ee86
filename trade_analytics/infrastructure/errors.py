"""Load Errors: Failures that abort loading a broker export.

Every error here is fatal to the load only. The caller keeps the trade
set it held before the load started.
"""


class TradeLoadError(Exception):
    """Base class for errors raised while loading trades."""


class EmptyInputError(TradeLoadError):
    """The export has fewer than two non-blank lines."""

    def __init__(self):
        super().__init__("CSV file appears to be empty or contains only headers")


class MissingColumnsError(TradeLoadError):
    """Required header columns are absent.

    Attributes:
        missing: Missing column names, in the order they were checked
    """

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"CSV is missing required columns: {', '.join(self.missing)}")


class NoCompletedTradesError(TradeLoadError):
    """No row has a non-zero realized P&L.

    Attributes:
        pending_rows: Structurally valid rows that were all open/pending
    """

    def __init__(self, pending_rows: int):
        self.pending_rows = pending_rows
        super().__init__(
            f"No completed trades found in CSV. All {pending_rows} trades "
            f"have P&L = 0 (likely pending/open trades)"
        )


class ReadFailureError(TradeLoadError):
    """The export could not be read."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(f"{message}" + (f" (path: {path})" if path else ""))
