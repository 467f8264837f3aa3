"""Streaming per-symbol trade statistics.

Parses ``timestamp,symbol,quantity,price`` lines, accumulates per-symbol
max inter-trade gap, total volume, volume-weighted average price and max
price, and reports them sorted by symbol.
"""

from tradestats.aggregation import AggregationStore
from tradestats.models import (
    ParseRejection,
    RejectionReason,
    ReportRow,
    RunSummary,
    SymbolStats,
    TradeRecord,
)
from tradestats.parser import parse_line
from tradestats.runner import aggregate_lines, format_row, run_file

__all__ = [
    "AggregationStore",
    "ParseRejection",
    "RejectionReason",
    "ReportRow",
    "RunSummary",
    "SymbolStats",
    "TradeRecord",
    "aggregate_lines",
    "format_row",
    "parse_line",
    "run_file",
]
