"""Configuration models.

Application configuration is stored as JSON and validated with pydantic.
It carries the storage backend selection and the Pomodoro settings.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

StorageType = Literal["json", "sqlite"]


class PomodoroSettings(BaseModel):
    """Pomodoro durations and break thresholds.

    Attributes:
        work_duration: Length of a work session in minutes
        short_break_duration: Length of a short break in minutes
        long_break_duration: Length of a long break in minutes
        sessions_until_long_break: Work sessions before a long break
        auto_start_breaks: Start a break automatically after a work session
        auto_start_pomodoros: Start a work session automatically after a break
    """

    work_duration: int = Field(default=25, ge=1)
    short_break_duration: int = Field(default=5, ge=1)
    long_break_duration: int = Field(default=15, ge=1)
    sessions_until_long_break: int = Field(default=4, ge=1)
    auto_start_breaks: bool = Field(default=False)
    auto_start_pomodoros: bool = Field(default=False)


DEFAULT_POMODORO_SETTINGS = PomodoroSettings()


class StorageConfig(BaseModel):
    """Persistence backend selection.

    ``json`` keeps each collection in a JSON document inside the ``source``
    directory. ``sqlite`` uses ``source`` as the database file path.
    """

    type: StorageType = Field(default="sqlite", description="Backend type")
    source: str = Field(..., description="Database path or data directory")

    @field_validator("source")
    @classmethod
    def validate_source(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("source cannot be empty")
        return v.strip()


class AppConfig(BaseModel):
    """Main focusnote configuration."""

    storage: StorageConfig
    pomodoro: PomodoroSettings = Field(default_factory=PomodoroSettings)
