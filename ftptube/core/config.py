"""Application configuration management."""
from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_YOUTUBE_BASE_URL = "https://www.googleapis.com/youtube/v3"
DEFAULT_SESSION_TTL = 3600
SESSION_COOKIE_NAME = "ftp_session"


class Settings(BaseSettings):
    """Resolved application settings used by FastAPI dependencies."""

    model_config = SettingsConfigDict(
        env_prefix="FTPTUBE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field("0.0.0.0", description="Application bind address")
    port: int = Field(5000, description="Application bind port")
    log_level: str = Field("INFO", description="Root logging level")

    youtube_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "youtube_api_key",
            "FTPTUBE_YOUTUBE_API_KEY",
            "YOUTUBE_API_KEY",
        ),
        description="YouTube Data API v3 key",
    )
    youtube_base_url: str = Field(
        DEFAULT_YOUTUBE_BASE_URL,
        description="Base URL of the YouTube Data API",
    )
    youtube_timeout: float = Field(10.0, description="Seconds before a YouTube API call times out")

    ftp_timeout: float = Field(30.0, description="Socket timeout for FTP connections in seconds")
    session_ttl: int = Field(
        DEFAULT_SESSION_TTL,
        description="Seconds an FTP file session stays valid",
    )
    session_sweep_interval: int = Field(
        300,
        description="Seconds between expired-session sweeps (0 disables the sweeper)",
    )
    cookie_max_age: int = Field(300, description="Lifetime of the session cookie in seconds")
    cookie_secure: bool = Field(False, description="Mark the session cookie as Secure")

    @property
    def youtube_configured(self) -> bool:
        return bool(self.youtube_api_key)


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
