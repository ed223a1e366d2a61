"""Configuration service for focusnote.

ConfigService is the single source of truth for configuration. It handles:

- Loading and saving config.json under the platformdirs config directory
- Creating a default configuration (SQLite under the data directory) on first run
- Building the storage strategy for the configured backend
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir
from pydantic import ValidationError

from focusnote.models.config_models import AppConfig, StorageConfig
from focusnote.models.exceptions import PersistenceError
from focusnote.models.storage_strategy import StorageStrategyContext, strategy_for

logger = logging.getLogger(__name__)

APP_NAME = "focusnote"
CONFIG_DIR_ENV = "FOCUSNOTE_CONFIG_DIR"
DATA_DIR_ENV = "FOCUSNOTE_DATA_DIR"


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self, config_dir: str | Path | None = None, data_dir: str | Path | None = None):
        """Initialize the config service.

        Args:
            config_dir: Directory holding config.json. Defaults to
                ``$FOCUSNOTE_CONFIG_DIR`` or the platformdirs config dir.
            data_dir: Directory for the default database. Defaults to
                ``$FOCUSNOTE_DATA_DIR`` or the platformdirs data dir.
        """
        self.config_dir = Path(
            config_dir or os.environ.get(CONFIG_DIR_ENV) or user_config_dir(APP_NAME)
        )
        self.data_dir = Path(data_dir or os.environ.get(DATA_DIR_ENV) or user_data_dir(APP_NAME))
        self.config_path = self.config_dir / "config.json"

        self._config: AppConfig | None = None
        self._storage_strategy_context: StorageStrategyContext | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def storage_strategy_context(self) -> StorageStrategyContext:
        """StorageStrategyContext for the configured backend, built on first use."""
        if self._storage_strategy_context is None:
            storage = self.config.storage
            self._storage_strategy_context = StorageStrategyContext(
                strategy_for(storage.type, storage.source)
            )
            logger.info("using %s storage at %s", storage.type, storage.source)
        return self._storage_strategy_context

    def load_config(self) -> AppConfig:
        """Load configuration from disk, creating the default on first run.

        Raises:
            PersistenceError: If the file cannot be read or is invalid
        """
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run
            self._config = self.create_default_config()
        except (OSError, ValidationError) as e:
            raise PersistenceError(f"Failed to load config {self.config_path}: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to disk with owner-only permissions.

        Raises:
            PersistenceError: If the file cannot be written
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))
            self.config_path.chmod(0o600)
        except OSError as e:
            raise PersistenceError(f"Failed to save config: {e}") from e

    def update_config(self, config: AppConfig) -> AppConfig:
        """Replace the configuration and persist it."""
        if self._config is None or self._config.storage != config.storage:
            self._storage_strategy_context = None
        self._config = config
        self.save_config()
        return config

    def reset_config(self) -> AppConfig:
        """Reset configuration to defaults."""
        self._config = None
        self._storage_strategy_context = None
        if self.config_path.exists():
            self.config_path.unlink()
        return self.create_default_config()

    def create_default_config(self) -> AppConfig:
        """Create and save the default configuration (SQLite in the data dir)."""
        self._config = AppConfig(
            storage=StorageConfig(type="sqlite", source=str(self.data_dir / "focusnote.db"))
        )
        self.save_config()
        logger.info("created default config at %s", self.config_path)
        return self._config


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
