"""Configuration system using pydantic-settings with environment variable loading."""

import codecs
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

EmptyVolumePolicy = Literal["fail", "skip", "zero"]


class IngestSettings(BaseSettings):
    """Input and output file handling."""

    model_config = SettingsConfigDict(env_prefix="INGEST_")

    encoding: str = "utf-8"

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"unknown encoding: {value}") from e
        return value


class ReportSettings(BaseSettings):
    """Report generation parameters.

    empty_volume_policy decides what happens to a symbol whose total volume
    is zero at report time (average price undefined):
    - "fail": abort the run with EmptyVolumeDivision, no output written
    - "skip": leave the symbol out of the report and log a warning
    - "zero": report the average price as 0
    """

    model_config = SettingsConfigDict(env_prefix="REPORT_")

    empty_volume_policy: EmptyVolumePolicy = "fail"


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    log_level: str = "INFO"
    ingest: IngestSettings = IngestSettings()
    report: ReportSettings = ReportSettings()
