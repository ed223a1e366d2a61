"""Pomodoro settings, persisted in the application config."""

from __future__ import annotations

import logging

from focusnote.models.config_models import PomodoroSettings
from focusnote.services.config_service import ConfigService

logger = logging.getLogger(__name__)


class SettingsService:
    """Read and change PomodoroSettings through the ConfigService."""

    def __init__(self, config_service: ConfigService):
        self.config_service = config_service

    def get(self) -> PomodoroSettings:
        """Current settings (a copy; mutate through :meth:`set`)."""
        return self.config_service.config.pomodoro.model_copy()

    def set(self, **changes) -> PomodoroSettings:
        """Apply a partial update and persist it.

        Raises:
            ValueError: If a key is not a known setting
            ValidationError: If a value is out of range

        Nothing is saved when validation fails.
        """
        unknown = set(changes) - set(PomodoroSettings.model_fields)
        if unknown:
            raise ValueError(f"Unknown setting(s): {', '.join(sorted(unknown))}")

        merged = {**self.config_service.config.pomodoro.model_dump(), **changes}
        settings = PomodoroSettings.model_validate(merged)
        self._store(settings)
        logger.info("updated pomodoro settings: %s", changes)
        return settings.model_copy()

    def reset(self) -> PomodoroSettings:
        """Restore the default settings."""
        settings = PomodoroSettings()
        self._store(settings)
        return settings.model_copy()

    def _store(self, settings: PomodoroSettings) -> None:
        config = self.config_service.config.model_copy(update={"pomodoro": settings})
        self.config_service.update_config(config)
