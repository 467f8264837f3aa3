"""Tests for the record parser."""

import pytest

from tradestats.models import ParseRejection, RejectionReason, TradeRecord
from tradestats.parser import parse_line


class TestValidLines:
    """Lines with four well-formed fields."""

    def test_basic_record(self) -> None:
        assert parse_line("100,AAPL,10,50") == TradeRecord(
            timestamp=100, symbol="AAPL", quantity=10, price=50
        )

    def test_signed_quantity_and_price(self) -> None:
        """Negative quantities and prices are accepted (no semantic checks)."""
        record = parse_line("5,XYZ,-3,-7")
        assert record == TradeRecord(timestamp=5, symbol="XYZ", quantity=-3, price=-7)

    def test_explicit_plus_sign(self) -> None:
        record = parse_line("+7,XYZ,+3,+4")
        assert record == TradeRecord(timestamp=7, symbol="XYZ", quantity=3, price=4)

    def test_symbol_taken_verbatim(self) -> None:
        """Symbol is not trimmed or validated, even when empty."""
        assert parse_line("1, aapl ,1,1").symbol == " aapl "
        assert parse_line("1,,1,1").symbol == ""

    def test_range_boundaries(self) -> None:
        record = parse_line(f"{2**64 - 1},MAX,{2**31 - 1},{-(2**31)}")
        assert record == TradeRecord(
            timestamp=2**64 - 1, symbol="MAX", quantity=2**31 - 1, price=-(2**31)
        )

    def test_zero_timestamp(self) -> None:
        assert parse_line("0,AAPL,1,1").timestamp == 0

    def test_leading_whitespace_in_numbers(self) -> None:
        """Spaces after the commas are skipped; the symbol keeps its space."""
        record = parse_line("100, AAPL, 10, 50")
        assert record == TradeRecord(timestamp=100, symbol=" AAPL", quantity=10, price=50)

    def test_leading_tab_and_sign(self) -> None:
        assert parse_line("\t7,X,\t-3, +4") == TradeRecord(
            timestamp=7, symbol="X", quantity=-3, price=4
        )

    def test_leading_whitespace_negative_timestamp_out_of_range(self) -> None:
        result = parse_line(" -1,X,1,1")
        assert result.reason is RejectionReason.NUMBER_OUT_OF_RANGE


class TestMalformedLine:
    """Field count other than four."""

    @pytest.mark.parametrize(
        "line",
        [
            "abc,AAPL,10",
            "100,AAPL,10,50,1",
            "",
            "100,AAPL,10,50,",  # trailing empty field is preserved
            "100;AAPL;10;50",
        ],
    )
    def test_wrong_field_count(self, line: str) -> None:
        result = parse_line(line)
        assert isinstance(result, ParseRejection)
        assert result.reason is RejectionReason.MALFORMED_LINE
        assert result.line == line
        assert result.field is None

    def test_field_count_checked_before_numbers(self) -> None:
        """A 3-field line with garbage numbers is malformed, not invalid."""
        result = parse_line("abc,AAPL,ten")
        assert result.reason is RejectionReason.MALFORMED_LINE


class TestInvalidNumber:
    """Numeric fields that are not integer text."""

    @pytest.mark.parametrize(
        ("line", "field"),
        [
            ("100,AAPL,ten,50", "quantity"),
            ("abc,AAPL,10,50", "timestamp"),
            ("100,AAPL,10,", "price"),
            (",AAPL,10,50", "timestamp"),
            ("100,AAPL,1.5,50", "quantity"),
            ("100,AAPL,10,  ", "price"),
            ("100,AAPL,10,- 5", "price"),
            ("100,AAPL,10,50 ", "price"),
            ("1_000,AAPL,10,50", "timestamp"),
            ("100,AAPL,10,50abc", "price"),
            ("100,AAPL,-,50", "quantity"),
        ],
    )
    def test_rejected_as_invalid(self, line: str, field: str) -> None:
        result = parse_line(line)
        assert isinstance(result, ParseRejection)
        assert result.reason is RejectionReason.INVALID_NUMBER
        assert result.field == field
        assert result.line == line

    def test_non_ascii_digits_rejected(self) -> None:
        """Unicode digits that int() would accept are still invalid."""
        result = parse_line("١٢,AAPL,1,1")
        assert result.reason is RejectionReason.INVALID_NUMBER

    def test_first_failing_field_wins(self) -> None:
        result = parse_line("abc,AAPL,ten,x")
        assert result.field == "timestamp"


class TestNumberOutOfRange:
    """Integer text that does not fit the target type."""

    def test_price_overflow(self) -> None:
        result = parse_line("100,AAPL,10,99999999999999999999")
        assert isinstance(result, ParseRejection)
        assert result.reason is RejectionReason.NUMBER_OUT_OF_RANGE
        assert result.field == "price"

    def test_distinct_from_invalid_number(self) -> None:
        overflow = parse_line("100,AAPL,10,99999999999999999999")
        invalid = parse_line("100,AAPL,ten,50")
        assert overflow.reason is not invalid.reason

    def test_quantity_just_above_int_range(self) -> None:
        result = parse_line(f"100,AAPL,{2**31},50")
        assert result.reason is RejectionReason.NUMBER_OUT_OF_RANGE
        assert result.field == "quantity"

    def test_price_just_below_int_range(self) -> None:
        result = parse_line(f"100,AAPL,1,{-(2**31) - 1}")
        assert result.reason is RejectionReason.NUMBER_OUT_OF_RANGE

    def test_timestamp_above_uint64(self) -> None:
        result = parse_line(f"{2**64},AAPL,1,1")
        assert result.reason is RejectionReason.NUMBER_OUT_OF_RANGE
        assert result.field == "timestamp"

    def test_negative_timestamp(self) -> None:
        result = parse_line("-1,AAPL,1,1")
        assert result.reason is RejectionReason.NUMBER_OUT_OF_RANGE
        assert result.field == "timestamp"
