"""Services module for focusnote - Business logic layer."""

from .config_service import ConfigService, get_config_service
from .session_service import SessionService
from .settings_service import SettingsService
from .stats_service import StatsService
from .task_service import TaskService
from .timer_service import TimerService

__all__ = [
    "ConfigService",
    "get_config_service",
    "TaskService",
    "SessionService",
    "TimerService",
    "StatsService",
    "SettingsService",
]
