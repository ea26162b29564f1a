"""Runtime configuration for the library manager."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import __version__
from .domain.log_level import LogLevel


class LibrarySettings(BaseSettings):
    """Configuration values mapped from ``RUNTIMELIBS_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RUNTIMELIBS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Cache location: <data_directory>/<directory_name>/<group path>/...
    data_directory: Path = Field(Path("."), description="Plugin data directory")
    directory_name: str = Field("libs", description="Sub-directory holding downloaded jars")

    # Network
    download_timeout: float = Field(5.0, gt=0, description="Connect/read timeout in seconds per request")
    user_agent: str = Field(f"runtimelibs/{__version__}", description="User-Agent header sent to repositories")

    repositories: List[str] = Field(default_factory=list, description="Repositories added at startup")
    log_level: str = Field("INFO", description="DEBUG, INFO, WARN or ERROR")

    @field_validator("directory_name")
    @classmethod
    def _directory_name_not_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("directory_name must not be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        return LogLevel.parse(value).name

    @property
    def save_directory(self) -> Path:
        return (self.data_directory.expanduser() / self.directory_name).absolute()


@lru_cache
def get_settings() -> LibrarySettings:
    """Return a cached settings instance built from the environment."""
    return LibrarySettings()
