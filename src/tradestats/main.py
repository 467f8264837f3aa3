"""Entry point for the trade statistics report.

Usage:
    tradestats <input_path> <output_path>

Reads the trade log at input_path and writes one line per symbol to
output_path. Exit status is 0 on success, 1 when the run fails (input
unreadable, output not writable, or zero total volume under the "fail"
policy) and 2 on bad arguments.
"""

import argparse
import sys

from tradestats.config import AppSettings
from tradestats.exceptions import TradeStatsError
from tradestats.logging import get_logger, setup_logging
from tradestats.runner import run_file


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tradestats",
        description="Per-symbol trade statistics: max gap, volume, VWAP, max price.",
    )
    parser.add_argument("input_path", help="Trade log, one timestamp,symbol,quantity,price per line.")
    parser.add_argument("output_path", help="Report file to create or truncate.")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the report and return the process exit status."""
    args = _build_parser().parse_args(argv)

    settings = AppSettings()
    setup_logging(settings.log_level)
    logger = get_logger("tradestats.main")

    try:
        run_file(args.input_path, args.output_path, settings)
    except TradeStatsError as e:
        logger.error("run_failed", error=str(e), error_type=type(e).__name__)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
