"""Wall-clock sources.

Services take a clock instead of calling ``datetime.now`` directly so tests
can move time forward deterministically.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta


class SystemClock:
    """Clock backed by the real system time (timezone-aware UTC)."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FakeClock:
    """Manually driven clock for tests and simulations."""

    def __init__(self, start: datetime | None = None):
        self._now = start or datetime(2024, 1, 1, 9, 0, tzinfo=UTC)

    def now(self) -> datetime:
        return self._now

    def advance(self, seconds: float = 0, *, minutes: float = 0) -> datetime:
        """Move the clock forward and return the new time."""
        self._now += timedelta(seconds=seconds, minutes=minutes)
        return self._now

    def set(self, value: datetime) -> None:
        self._now = value


def elapsed_whole_minutes(start: datetime, end: datetime) -> int:
    """Whole minutes between two timestamps, rounded down, never negative."""
    seconds = (end - start).total_seconds()
    return max(0, int(seconds // 60))


def format_duration(minutes: float) -> str:
    """Format minutes as hours and minutes."""
    hours = int(minutes // 60)
    mins = int(minutes % 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"
