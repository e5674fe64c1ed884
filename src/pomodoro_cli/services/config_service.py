"""Configuration service for Pomodoro CLI.

ConfigService is the single source of truth for configuration. It handles:

- Loading and saving config.json in the platform config directory
- Dotted-key access (``pomodoro.break_duration``) for the ``config`` commands
- Resolving the task file location
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, ValidationError

from pomodoro_cli.models.config_models import AppConfig, PomodoroSettings
from pomodoro_cli.utils.logger import get_logger

_APP_NAME = "pomodoro_cli"
_DEFAULT_TASKS_FILE = "tasks.json"


class ConfigService:
    """Service for loading, saving and editing the application configuration."""

    def __init__(self):
        self.config_dir = Path(user_config_dir(_APP_NAME))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir(_APP_NAME))

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None
        self.logger = get_logger("config")

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from storage."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run: write the defaults so users can find and edit them
            self._config = AppConfig()
            self.save_config()
        except Exception as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to storage."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))
        except Exception as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key, None if unknown."""
        return self._lookup(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not name an existing setting
            ValueError: If the new value does not validate
        """
        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                raise KeyError(key)
            current = current[k]
        if keys[-1] not in current:
            raise KeyError(key)

        current[keys[-1]] = value

        try:
            self._config = AppConfig.model_validate(config_dict)
        except ValidationError as e:
            raise ValueError(f"Invalid value for '{key}': {e.errors()[0]['msg']}") from e
        self.save_config()
        self.logger.info("Config %s set to %r", key, value)

    def reset_config(self, key: str | None = None) -> None:
        """Reset the whole configuration, or a single key, to defaults."""
        if key is None:
            self._config = AppConfig()
            self.save_config()
        else:
            default = self._lookup(AppConfig(), key)
            if isinstance(default, BaseModel):
                default = default.model_dump()
            self.set(key, default)
        self.logger.info("Config reset: %s", key or "all")

    @staticmethod
    def _lookup(config: AppConfig, key: str) -> Any:
        value: Any = config
        for k in key.split("."):
            if not isinstance(value, BaseModel) or k not in type(value).model_fields:
                return None
            value = getattr(value, k)
        return value

    @property
    def pomodoro_settings(self) -> PomodoroSettings:
        return self.config.pomodoro

    def get_tasks_file(self) -> Path:
        """Location of the task list, defaulting to the user data dir."""
        configured = self.config.pomodoro.tasks_file
        if configured:
            return Path(configured).expanduser()
        return self.data_dir / _DEFAULT_TASKS_FILE


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
