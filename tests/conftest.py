"""Shared test fixtures for the trade statistics engine."""

from pathlib import Path

import pytest

from tradestats.aggregation import AggregationStore
from tradestats.config import AppSettings, IngestSettings, ReportSettings


@pytest.fixture
def mock_settings() -> AppSettings:
    """Return AppSettings with test defaults (fail policy, utf-8)."""
    return AppSettings(
        log_level="DEBUG",
        ingest=IngestSettings(encoding="utf-8"),
        report=ReportSettings(empty_volume_policy="fail"),
    )


@pytest.fixture
def store() -> AggregationStore:
    """Empty AggregationStore."""
    return AggregationStore()


@pytest.fixture
def write_input(tmp_path: Path):
    """Write lines to an input file under tmp_path and return its path."""

    def _write(lines: list[str], name: str = "trades.csv") -> Path:
        path = tmp_path / name
        path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
        return path

    return _write
