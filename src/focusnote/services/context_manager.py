"""Bootstrap of the storage strategy and the service graph.

Usage Pattern:
    from focusnote.services.context_manager import get_services

    services = get_services()
    task = await services.tasks.add_task("Write report")
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from focusnote.models.storage_strategy import StorageStrategyContext
from focusnote.services.config_service import ConfigService, get_config_service
from focusnote.services.session_service import SessionService
from focusnote.services.settings_service import SettingsService
from focusnote.services.stats_service import StatsService
from focusnote.services.task_service import TaskService
from focusnote.services.timer_service import TimerService
from focusnote.utils.clock import SystemClock
from focusnote.utils.ticker import AsyncioTicker, Ticker


@lru_cache(maxsize=1)
def get_strategy_context() -> StorageStrategyContext:
    """Get the cached StorageStrategyContext for the configured backend."""
    return get_config_service().storage_strategy_context


@dataclass
class Services:
    """The wired set of services sharing one clock and one backend."""

    config: ConfigService
    settings: SettingsService
    tasks: TaskService
    sessions: SessionService
    stats: StatsService
    timer: TimerService


def build_services(
    config_service: ConfigService,
    strategy: StorageStrategyContext | None = None,
    clock=None,
    ticker: Ticker | None = None,
) -> Services:
    """Wire every service over one storage strategy.

    Args:
        config_service: Configuration source (also persists settings)
        strategy: Store provider; defaults to the one the config selects
        clock: Shared clock, SystemClock by default
        ticker: Countdown ticker, AsyncioTicker by default
    """
    strategy = strategy or config_service.storage_strategy_context
    clock = clock or SystemClock()

    settings = SettingsService(config_service)
    tasks = TaskService(strategy.task_store, clock=clock)
    sessions = SessionService(strategy.session_store, tasks, clock=clock)
    stats = StatsService(tasks, sessions)
    timer = TimerService(
        tasks,
        sessions,
        settings,
        ticker=ticker or AsyncioTicker(),
        clock=clock,
    )
    return Services(
        config=config_service,
        settings=settings,
        tasks=tasks,
        sessions=sessions,
        stats=stats,
        timer=timer,
    )


def get_services() -> Services:
    """Build services over the cached config and storage strategy."""
    return build_services(get_config_service(), get_strategy_context())
