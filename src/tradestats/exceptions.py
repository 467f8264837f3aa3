"""Custom exceptions for the trade statistics engine.

Per-line parse failures are NOT exceptions: the parser returns a
ParseRejection value for them. Everything here aborts a whole run.
"""


class TradeStatsError(Exception):
    """Base exception for all trade statistics errors."""


class EmptyVolumeDivision(TradeStatsError):
    """Raised when a symbol's total volume is zero at report time."""

    def __init__(self, symbols: list[str]) -> None:
        self.symbols = symbols
        super().__init__(
            f"total volume is zero, average price undefined for: {', '.join(symbols)}"
        )


class InputFileError(TradeStatsError):
    """Raised when the input file cannot be opened or read."""


class OutputFileError(TradeStatsError):
    """Raised when the output file cannot be created or written."""
