"""Runtime settings with Pydantic Settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class UnibookSettings(BaseSettings):
    """Runtime settings with environment variable support.

    These control how unibook runs, not what the book contains (that lives
    in book.toml). Settings can be provided via:
    1. Environment variables (prefixed with UNIBOOK_)
    2. .env file
    3. Direct instantiation

    Example:
        export UNIBOOK_CONVERTER=pandoc
        export UNIBOOK_LOG_LEVEL=DEBUG

        settings = UnibookSettings()
        print(settings.converter)  # pandoc
    """

    model_config = SettingsConfigDict(
        env_prefix="UNIBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Converter
    converter: str = Field(default="unidoc", description="External Markdown converter executable")
    converter_timeout: float | None = Field(
        default=None, gt=0, description="Seconds before a converter run is aborted (none = wait)"
    )

    # Watch loop
    debounce_ms: int = Field(
        default=500, ge=0, description="Minimum time between two rebuilds in milliseconds"
    )
    poll_interval_ms: int = Field(
        default=100, ge=1, description="How long the watch loop waits for an event per tick"
    )

    # Preview server
    host: str = Field(default="0.0.0.0", description="Address the preview server binds to")
    port: int = Field(default=3000, ge=1, le=65535, description="Preview server port")

    # Logging
    log_level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_file: Path | None = Field(default=None, description="Optional log file path")
