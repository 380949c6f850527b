"""Environment and CLI runtime configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Self

from dotenv import load_dotenv

from technical_analysis.errors import ConfigError

OUTPUT_FORMATS = ("csv", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Immutable runtime settings."""

    data_dir: str = "historical_data"
    indicator: str = "bb"
    output_format: str = "csv"
    log_level: str = "INFO"
    log_file: str | None = None

    @classmethod
    def from_env(cls) -> Self:
        """Create settings from environment variables."""
        load_dotenv()
        raw = cls(
            data_dir=str(os.getenv("TA_DATA_DIR", "historical_data")).strip(),
            indicator=str(os.getenv("TA_INDICATOR", "bb")).strip().lower(),
            output_format=str(os.getenv("TA_OUTPUT_FORMAT", "csv")).strip().lower(),
            log_level=str(os.getenv("LOG_LEVEL", "INFO")).strip().upper(),
            log_file=str(os.getenv("TA_LOG_FILE", "")).strip() or None,
        )
        return raw.validate()

    def with_overrides(self, **kwargs: object) -> Self:
        """Return a new settings object with updated values."""
        return replace(self, **kwargs).validate()

    def validate(self) -> Self:
        """Validate settings fields."""
        if not self.data_dir:
            raise ConfigError("data_dir must not be empty")
        if not self.indicator:
            raise ConfigError("indicator must not be empty")
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigError(f"output_format must be one of {', '.join(OUTPUT_FORMATS)}")
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return self
