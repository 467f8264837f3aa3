"""Record parser: one raw input line to a TradeRecord or a ParseRejection.

Line format: ``timestamp,symbol,quantity,price``. Fields are split on every
comma with empty fields preserved; there is no trimming and no quoting.

Expected failures are returned as ParseRejection values rather than raised,
since malformed lines are routine in trade logs and are simply skipped.
"""

import re

from tradestats.models import (
    INT_MAX,
    INT_MIN,
    TIMESTAMP_MAX,
    TIMESTAMP_MIN,
    ParseRejection,
    ParseResult,
    RejectionReason,
    TradeRecord,
)

FIELD_COUNT = 4

# Leading ASCII whitespace is allowed, trailing characters are not.
_INTEGER_RE = re.compile(r"[ \t\n\v\f\r]*[+-]?[0-9]+")


def _parse_int(
    text: str, name: str, line: str, low: int, high: int
) -> int | ParseRejection:
    """Parse ``text`` as an integer within [low, high].

    Accepts optional leading whitespace, an optional sign and ASCII digits.
    Trailing whitespace, underscores and any other characters make the
    field invalid.
    """
    if not _INTEGER_RE.fullmatch(text):
        return ParseRejection(
            reason=RejectionReason.INVALID_NUMBER,
            line=line,
            field=name,
            detail=f"{name} is not an integer: {text!r}",
        )

    value = int(text)
    if value < low or value > high:
        return ParseRejection(
            reason=RejectionReason.NUMBER_OUT_OF_RANGE,
            line=line,
            field=name,
            detail=f"{name} {text} outside [{low}, {high}]",
        )
    return value


def parse_line(line: str) -> ParseResult:
    """Parse one raw line into a TradeRecord.

    Numeric fields are checked in the order timestamp, quantity, price and
    the first failing field decides the rejection.

    Args:
        line: Raw line without its trailing newline.

    Returns:
        TradeRecord on success, otherwise a ParseRejection carrying one of
        MALFORMED_LINE (field count is not 4), INVALID_NUMBER (not integer
        text) or NUMBER_OUT_OF_RANGE (integer text outside the target type).
    """
    fields = line.split(",")
    if len(fields) != FIELD_COUNT:
        return ParseRejection(
            reason=RejectionReason.MALFORMED_LINE,
            line=line,
            detail=f"expected {FIELD_COUNT} fields, got {len(fields)}",
        )

    raw_timestamp, symbol, raw_quantity, raw_price = fields

    timestamp = _parse_int(raw_timestamp, "timestamp", line, TIMESTAMP_MIN, TIMESTAMP_MAX)
    if isinstance(timestamp, ParseRejection):
        return timestamp

    quantity = _parse_int(raw_quantity, "quantity", line, INT_MIN, INT_MAX)
    if isinstance(quantity, ParseRejection):
        return quantity

    price = _parse_int(raw_price, "price", line, INT_MIN, INT_MAX)
    if isinstance(price, ParseRejection):
        return price

    return TradeRecord(
        timestamp=timestamp,
        symbol=symbol,
        quantity=quantity,
        price=price,
    )
