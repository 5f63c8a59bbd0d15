# ABOUTME: Pydantic Settings configuration read from LOCATION_SCOUT_* environment variables
# ABOUTME: Provides type-safe access to extraction flags, safety bounds, storage and logging settings

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = "location-scout/0.1 (filming location extractor)"


class ExtractionSettings(BaseModel):
    """Knobs consumed by the pure extraction engine."""

    model_config = ConfigDict(frozen=True)

    validate_coordinates: bool = False
    max_sibling_steps: int = Field(default=200, ge=1)
    max_records: int = Field(default=200, ge=0)
    max_audit_locations: int = Field(default=500, ge=0)
    min_markup_line_length: int = Field(default=5, ge=0)
    max_markup_line_length: int = Field(default=400, ge=1)
    max_markup_lines: int = Field(default=200, ge=0)


class Config(BaseSettings):
    """Settings read from LOCATION_SCOUT_* environment variables and an optional .env file."""

    model_config = SettingsConfigDict(
        env_prefix="LOCATION_SCOUT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Extraction behaviour
    use_wiki_markup: bool = Field(
        default=True, description="Fetch raw wiki markup for Wikipedia pages and parse its Filming locations section"
    )
    validate_coordinates: bool = Field(
        default=False, description="Discard coordinate matches outside latitude/longitude bounds"
    )
    use_browser: bool = Field(
        default=False, description="Render pages in a headless browser instead of fetching plain HTML"
    )

    # Safety bounds against malformed or adversarial documents
    max_sibling_steps: int = Field(default=200, ge=1, description="Maximum siblings walked after a matching heading")
    max_records: int = Field(default=200, ge=0, description="Maximum location records emitted per page")
    max_audit_locations: int = Field(default=500, ge=0, description="Maximum phrases kept in a page audit snapshot")
    min_markup_line_length: int = Field(default=5, ge=0, description="Markup lines must be longer than this")
    max_markup_line_length: int = Field(default=400, ge=1, description="Markup lines must be shorter than this")
    max_markup_lines: int = Field(default=200, ge=0, description="Maximum candidate lines taken from markup")

    # HTTP
    request_timeout: float = Field(default=20.0, gt=0, description="Timeout in seconds for page and markup fetches")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User-Agent header sent with every request")

    # Storage
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/location_scout.db", description="Database URL for async SQLite operations"
    )
    save_results: bool = Field(default=True, description="Persist records and audit snapshots")

    # Logging
    log_mode: Literal["interactive", "production"] = Field(
        default="interactive", description="interactive writes files under logs/, production writes JSON to stdout"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO", description="Minimum log level")
    log_file: Path | None = Field(default=None, description="Replaces logs/location-scout.log in interactive mode")

    def extraction_settings(self) -> ExtractionSettings:
        """The engine's view of these settings, frozen."""
        return ExtractionSettings(**self.model_dump(include=set(ExtractionSettings.model_fields)))


_config: Config | None = None


def get_config() -> Config:
    """Process-wide settings, read from the environment and ``.env`` on first use."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reload_config() -> Config:
    """Discard the cached settings and read them again.

    Returns:
        The new process-wide Config
    """
    global _config
    _config = Config()
    return _config
