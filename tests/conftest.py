"""Shared test fixtures and configuration.

Isolates tests from the real config/data/log directories and wires the
services over a temporary store, a FakeClock and a ManualTicker.
"""

from __future__ import annotations

import pytest

from focusnote.adapters.sqlite.connection import DatabaseConnection
from focusnote.models.storage_strategy import (
    JsonStorageStrategy,
    SqliteStorageStrategy,
    StorageStrategyContext,
)
from focusnote.services.config_service import ConfigService, get_config_service
from focusnote.services.context_manager import build_services, get_strategy_context
from focusnote.utils.clock import FakeClock
from focusnote.utils.logger import reset_logger
from focusnote.utils.ticker import ManualTicker

# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Point config, data and log directories at *tmp_path*."""
    monkeypatch.setenv("FOCUSNOTE_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.setenv("FOCUSNOTE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("FOCUSNOTE_LOG_DIR", str(tmp_path / "logs"))
    get_config_service.cache_clear()
    get_strategy_context.cache_clear()
    yield tmp_path
    get_config_service.cache_clear()
    get_strategy_context.cache_clear()
    reset_logger()
    DatabaseConnection.close_all()


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ticker(clock):
    """Ticker that advances the FakeClock by one second per tick."""
    return ManualTicker(clock)


@pytest.fixture
def config_service(tmp_path):
    return ConfigService(config_dir=tmp_path / "config", data_dir=tmp_path / "data")


@pytest.fixture(params=["json", "sqlite"])
def strategy(request, tmp_path):
    """A storage strategy for each backend."""
    if request.param == "json":
        return StorageStrategyContext(JsonStorageStrategy(tmp_path / "store"))
    return StorageStrategyContext(SqliteStorageStrategy(str(tmp_path / "store.db")))


@pytest.fixture
def services(config_service, strategy, clock, ticker):
    """Every service wired over one backend, one clock and one ticker."""
    return build_services(config_service, strategy=strategy, clock=clock, ticker=ticker)
