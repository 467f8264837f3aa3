"""Driver: feeds input lines through the parser into the aggregation store.

Provides aggregate_lines() for any iterable of lines, format_row() for the
output line format, and run_file() which wires both to an input and an
output path.

Rejected lines produce exactly one diagnostic each and never abort the run.
The report is written to a sibling ``.tmp`` file and moved over the output
path only once complete, so a failed run leaves no partial output behind.
"""

import os
import time
from collections.abc import Iterable
from pathlib import Path

from tradestats.aggregation import AggregationStore
from tradestats.config import AppSettings
from tradestats.exceptions import InputFileError, OutputFileError
from tradestats.logging import get_logger
from tradestats.models import ParseRejection, RejectionReason, ReportRow, RunSummary
from tradestats.parser import parse_line

logger = get_logger(__name__)


def _strip_line_ending(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def _report_rejection(rejection: ParseRejection, line_number: int) -> None:
    if rejection.reason is RejectionReason.MALFORMED_LINE:
        logger.warning(
            "line_rejected",
            reason=rejection.reason.value,
            line_number=line_number,
            line=rejection.line,
            detail=rejection.detail,
        )
    else:
        logger.error(
            "line_rejected",
            reason=rejection.reason.value,
            line_number=line_number,
            line=rejection.line,
            field=rejection.field,
            detail=rejection.detail,
        )


def _discard(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass


def aggregate_lines(lines: Iterable[str], store: AggregationStore) -> RunSummary:
    """Parse each line and apply the valid ones to ``store`` in order.

    Args:
        lines: Raw lines, with or without trailing newlines.
        store: The store to update. Owned by the caller.

    Returns:
        RunSummary with line, record and rejection counts.
    """
    summary = RunSummary()

    for line_number, raw in enumerate(lines, start=1):
        summary.lines_read += 1
        result = parse_line(_strip_line_ending(raw))

        if isinstance(result, ParseRejection):
            summary.rejections[result.reason] += 1
            _report_rejection(result, line_number)
            continue

        store.update(result)
        summary.records_applied += 1

    summary.symbols = len(store)
    return summary


def format_row(row: ReportRow) -> str:
    """Render a report row as ``symbol,max_gap,total_volume,average_price,max_price``."""
    return (
        f"{row.symbol},{row.max_gap},{row.total_volume},"
        f"{row.average_price},{row.max_price}"
    )


def run_file(
    input_path: str | Path,
    output_path: str | Path,
    settings: AppSettings | None = None,
) -> RunSummary:
    """Aggregate ``input_path`` and write the sorted report to ``output_path``.

    Args:
        input_path: Trade log, one ``timestamp,symbol,quantity,price`` per line.
        output_path: Report destination, created or replaced.
        settings: Application settings. Defaults to AppSettings().

    Returns:
        RunSummary including the number of rows written.

    Raises:
        InputFileError: If the input cannot be opened or read.
        OutputFileError: If the output cannot be created or written.
        EmptyVolumeDivision: If a symbol has zero total volume and the
            report policy is "fail". Nothing is written in that case.
    """
    if settings is None:
        settings = AppSettings()

    encoding = settings.ingest.encoding
    start_time = time.monotonic()

    logger.info(
        "run_starting",
        input_path=str(input_path),
        output_path=str(output_path),
        empty_volume_policy=settings.report.empty_volume_policy,
    )

    store = AggregationStore(encoding)
    try:
        with open(input_path, encoding=encoding, errors="surrogateescape") as f:
            summary = aggregate_lines(f, store)
    except OSError as e:
        raise InputFileError(f"failed to read input file {input_path}: {e}") from e

    rows = store.report(settings.report.empty_volume_policy)

    tmp_path = f"{output_path}.tmp"
    try:
        with open(tmp_path, "w", encoding=encoding, errors="surrogateescape", newline="") as f:
            for row in rows:
                f.write(format_row(row) + "\n")
        os.replace(tmp_path, output_path)
    except OSError as e:
        _discard(tmp_path)
        raise OutputFileError(f"failed to write output file {output_path}: {e}") from e

    summary.rows_written = len(rows)
    elapsed = time.monotonic() - start_time

    logger.info(
        "run_complete",
        lines_read=summary.lines_read,
        records_applied=summary.records_applied,
        lines_rejected=summary.lines_rejected,
        symbols=summary.symbols,
        rows_written=summary.rows_written,
        elapsed_seconds=round(elapsed, 3),
    )

    return summary
