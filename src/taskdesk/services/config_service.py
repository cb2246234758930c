"""Configuration service for managing taskdesk configuration.

This module provides the ConfigService class, the single source of truth for
configuration. It handles:

- Loading and saving config.json under the platform config directory
- Dotted-key access (``storage.type``) for the CLI
- Environment variable overrides for the storage settings
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel

from taskdesk.models.config_models import AppConfig, StorageConfig

_APP_NAME = "taskdesk"

# Environment variables checked in order; the first one set wins
STORAGE_TYPE_ENV = ("TASKDESK_STORAGE_TYPE", "STORAGE_TYPE")
DATA_DIR_ENV = ("TASKDESK_DATA_DIR", "DATA_DIR")


def _first_env(names: tuple[str, ...]) -> str | None:
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return None


class ConfigService:
    """Service for managing application configuration.

    The configuration is loaded lazily from ``config.json`` and cached for the
    lifetime of the service. A missing file is replaced by the defaults.
    """

    def __init__(self):
        """Initialize the config service."""

        self.config_dir = Path(user_config_dir(_APP_NAME))
        self.config_path = self.config_dir / "config.json"
        self.default_data_dir = Path(user_data_dir(_APP_NAME))

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from storage.

        Raises:
            RuntimeError: If the file exists but cannot be read or parsed
        """
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run
            self._config = AppConfig()
            self.save_config()
        except Exception as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to storage."""
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))

            self.config_path.chmod(0o600)
        except Exception as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self._get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not name a configuration field
            pydantic.ValidationError: If the value is invalid for the field
        """
        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                raise KeyError(f"Unknown configuration key: {key}")
            current = current[k]
        if keys[-1] not in current:
            raise KeyError(f"Unknown configuration key: {key}")

        current[keys[-1]] = value

        self._config = AppConfig.model_validate(config_dict)
        self.save_config()

    def reset(self, key: str | None = None) -> None:
        """Reset configuration, or a single key, to defaults."""
        if key is None:
            self._config = AppConfig()
            self.save_config()
        else:
            self.set(key, self._get_from_config(AppConfig(), key))

    @staticmethod
    def _get_from_config(config: AppConfig, key: str) -> Any:
        value: Any = config
        for k in key.split("."):
            if isinstance(value, BaseModel):
                value = getattr(value, k, None)
            else:
                return None
        return value

    def storage_settings(self) -> StorageConfig:
        """Get storage settings with environment overrides applied."""
        settings = self.config.storage
        overrides = {}
        storage_type = _first_env(STORAGE_TYPE_ENV)
        if storage_type:
            overrides["type"] = storage_type
        data_dir = _first_env(DATA_DIR_ENV)
        if data_dir:
            overrides["data_dir"] = data_dir
        return settings.model_copy(update=overrides)

    def resolve_data_dir(self) -> Path:
        """Get the directory holding the task store."""
        data_dir = self.storage_settings().data_dir
        if data_dir:
            return Path(data_dir).expanduser()
        return self.default_data_dir


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get the process-wide ConfigService."""
    return ConfigService()
