"""
Application settings and configuration management.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

_BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Logging
    log_level: str = Field(default="INFO")

    # Upstream identity
    base_url: str = Field(default="https://www.youtube.com")
    user_agent: str = Field(default=_BROWSER_USER_AGENT)
    consent_cookie: str = Field(default="SOCS=CAI")

    # Performance
    request_timeout: float = Field(default=30.0)
    retry_attempts: int = Field(default=3)

    # Locale defaults
    default_gl: str = Field(default="US")
    default_hl: str = Field(default="en")
    default_utc_offset_minutes: int = Field(default=-300)

    # Limits
    playlist_limit: int = Field(default=100)
    search_limit: int = Field(default=10)

    # Diagnostics
    dump_dir: Path = Field(default=Path("./dumps"))
    dump_on_failure: bool = Field(default=True)

    @field_validator("dump_dir", mode="before")
    @classmethod
    def ensure_path(cls, v: str | Path) -> Path:
        """Ensure directory paths are Path objects."""
        if isinstance(v, str):
            return Path(v)
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    @field_validator("retry_attempts", "playlist_limit", "search_limit")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Require strictly positive counts."""
        if v < 1:
            raise ValueError(f"Value must be at least 1, got {v}")
        return v

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL without a trailing slash."""
        return v.rstrip("/")

    @property
    def browse_api_url(self) -> str:
        """Innertube browse endpoint."""
        return f"{self.base_url}/youtubei/v1/browse"

    @property
    def search_api_url(self) -> str:
        """Innertube search endpoint."""
        return f"{self.base_url}/youtubei/v1/search"

    @property
    def default_headers(self) -> dict[str, str]:
        """Headers sent with every request (browser UA and consent cookie)."""
        return {"User-Agent": self.user_agent, "Cookie": self.consent_cookie}

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
