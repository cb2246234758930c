"""Configuration models for taskdesk."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class StorageConfig(BaseModel):
    """Storage backend configuration.

    ``type`` is matched loosely: ``database`` or ``db`` selects SQLite,
    anything else selects the JSON snapshot file.
    """

    type: str = Field(default="file", description="Storage backend (file or database)")
    data_dir: str | None = Field(
        default=None, description="Directory holding tasks.json / tasks.db"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="DEBUG"
    )


class AppConfig(BaseModel):
    """Main configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
