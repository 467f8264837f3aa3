"""Shared data models for the trade statistics engine.

CRITICAL: Prices and quantities are integers (price in minor currency units).
Never convert them to float: the average price is an integer division that
truncates toward zero.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum

# Target ranges of the input columns.
TIMESTAMP_MIN = 0
TIMESTAMP_MAX = 2**64 - 1  # unsigned 64-bit
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1  # signed 32-bit, quantity and price


class RejectionReason(str, Enum):
    """Why a raw input line was not applied."""

    MALFORMED_LINE = "malformed_line"
    INVALID_NUMBER = "invalid_number"
    NUMBER_OUT_OF_RANGE = "number_out_of_range"


@dataclass(frozen=True)
class TradeRecord:
    """A single validated trade line."""

    timestamp: int  # logical time unit, unsigned 64-bit
    symbol: str
    quantity: int
    price: int  # minor currency units


@dataclass(frozen=True)
class ParseRejection:
    """A raw line that failed parsing, with enough context to debug it."""

    reason: RejectionReason
    line: str
    field: str | None = None  # None for malformed lines
    detail: str = ""


ParseResult = TradeRecord | ParseRejection


@dataclass
class SymbolStats:
    """Running statistics for a single symbol.

    last_timestamp == 0 means no trade has been applied yet.
    """

    last_timestamp: int = 0
    max_gap: int = 0
    total_volume: int = 0
    weighted_sum: int = 0  # sum of quantity * price
    max_price: int = 0


@dataclass(frozen=True)
class ReportRow:
    """One output line of the final report."""

    symbol: str
    max_gap: int
    total_volume: int
    average_price: int
    max_price: int


@dataclass
class RunSummary:
    """Counters collected while aggregating one input."""

    lines_read: int = 0
    records_applied: int = 0
    rejections: Counter = field(default_factory=Counter)
    symbols: int = 0
    rows_written: int = 0

    @property
    def lines_rejected(self) -> int:
        return sum(self.rejections.values())
