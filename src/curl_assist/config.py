"""Settings for the command-line front end.

Engine functions never read settings themselves; the CLI passes the
relevant values in as arguments.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """curl-assist configuration, read from CURL_ASSIST_* env vars or a .env file."""

    model_config = SettingsConfigDict(
        env_prefix="CURL_ASSIST_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    similarity_threshold: float = Field(
        default=0.5,
        gt=0,
        le=1,
        description="Minimum bigram similarity for a 'Did you mean' flag suggestion.",
    )
    environment_file: Path | None = Field(
        default=None,
        description="Environment file used when --env is not given.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Logging level when --verbose is not given.",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
