"""Per-symbol streaming aggregation of trade records.

Holds one SymbolStats accumulator per symbol, updated incrementally in input
order, and renders a report sorted by symbol.

Gap semantics mirror unsigned 64-bit arithmetic:
  - The first record of a symbol (last_timestamp == 0) computes no gap.
    A record timestamped 0 therefore leaves the symbol looking untraded.
  - A timestamp lower than the previous one wraps around to 2**64 - d.
Both are kept as-is; see DESIGN.md (open questions).
"""

from collections.abc import Iterable
from dataclasses import replace

from tradestats.config import EmptyVolumePolicy
from tradestats.exceptions import EmptyVolumeDivision
from tradestats.logging import get_logger
from tradestats.models import ReportRow, SymbolStats, TradeRecord

logger = get_logger(__name__)

_UINT64_MODULUS = 2**64


def _truncating_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero (``//`` rounds toward -inf)."""
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


class AggregationStore:
    """Mapping from symbol to its running statistics.

    Single writer: records must be applied through update() in input order,
    since max_gap depends on the order of records within a symbol.

    Rows are ordered by the bytes of each symbol in ``encoding``, the
    encoding the input was decoded with. surrogateescape restores input
    bytes that did not decode.

    Usage:
        store = AggregationStore()
        for record in records:
            store.update(record)
        rows = store.report()
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding
        self._stats: dict[str, SymbolStats] = {}

    def _sort_key(self, symbol: str) -> bytes:
        return symbol.encode(self._encoding, "surrogateescape")

    def __len__(self) -> int:
        return len(self._stats)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._stats

    def get(self, symbol: str) -> SymbolStats | None:
        """Return a copy of the accumulator for ``symbol``, or None if unseen."""
        stats = self._stats.get(symbol)
        if stats is None:
            return None
        return replace(stats)

    def update(self, record: TradeRecord) -> None:
        """Apply one validated record to its symbol's accumulator."""
        stats = self._stats.get(record.symbol)
        if stats is None:
            stats = SymbolStats()
            self._stats[record.symbol] = stats

        if stats.last_timestamp != 0:
            gap = (record.timestamp - stats.last_timestamp) % _UINT64_MODULUS
            stats.max_gap = max(stats.max_gap, gap)
        stats.last_timestamp = record.timestamp

        stats.total_volume += record.quantity
        stats.weighted_sum += record.quantity * record.price
        stats.max_price = max(stats.max_price, record.price)

    def apply_all(self, records: Iterable[TradeRecord]) -> int:
        """Apply records in iteration order. Returns the number applied."""
        count = 0
        for record in records:
            self.update(record)
            count += 1
        return count

    def report(self, empty_volume_policy: EmptyVolumePolicy = "fail") -> list[ReportRow]:
        """Build the final report, one row per symbol, sorted byte-wise by symbol.

        Average price is weighted_sum / total_volume truncated toward zero.
        Does not modify any accumulator.

        Args:
            empty_volume_policy: Handling of symbols whose total volume is zero
                ("fail", "skip" or "zero"; see ReportSettings).

        Returns:
            List of ReportRow in ascending symbol order.

        Raises:
            EmptyVolumeDivision: If any symbol has zero total volume and the
                policy is "fail". All offending symbols are named.
        """
        rows: list[ReportRow] = []
        empty: list[str] = []

        for symbol in sorted(self._stats, key=self._sort_key):
            stats = self._stats[symbol]

            if stats.total_volume == 0:
                empty.append(symbol)
                if empty_volume_policy == "skip":
                    logger.warning(
                        "empty_volume_row_skipped",
                        symbol=symbol,
                        weighted_sum=stats.weighted_sum,
                    )
                    continue
                if empty_volume_policy == "zero":
                    logger.warning("empty_volume_average_zeroed", symbol=symbol)
                average_price = 0
            else:
                average_price = _truncating_div(stats.weighted_sum, stats.total_volume)

            rows.append(
                ReportRow(
                    symbol=symbol,
                    max_gap=stats.max_gap,
                    total_volume=stats.total_volume,
                    average_price=average_price,
                    max_price=stats.max_price,
                )
            )

        if empty and empty_volume_policy == "fail":
            raise EmptyVolumeDivision(empty)

        return rows
