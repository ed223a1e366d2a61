"""Unit tests for clocks and duration helpers."""

from datetime import UTC, datetime, timedelta

from focusnote.utils.clock import FakeClock, SystemClock, elapsed_whole_minutes, format_duration

_START = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)


class TestClocks:
    def test_system_clock_is_timezone_aware(self):
        assert SystemClock().now().tzinfo is not None

    def test_fake_clock_advance(self):
        clock = FakeClock(_START)
        clock.advance(30, minutes=2)
        assert clock.now() == _START + timedelta(minutes=2, seconds=30)

    def test_fake_clock_set(self):
        clock = FakeClock()
        clock.set(_START)
        assert clock.now() == _START


class TestElapsedWholeMinutes:
    def test_rounds_down(self):
        assert elapsed_whole_minutes(_START, _START + timedelta(seconds=59)) == 0
        assert elapsed_whole_minutes(_START, _START + timedelta(minutes=25)) == 25
        assert elapsed_whole_minutes(_START, _START + timedelta(minutes=25, seconds=59)) == 25

    def test_never_negative(self):
        assert elapsed_whole_minutes(_START, _START - timedelta(minutes=5)) == 0


def test_format_duration():
    assert format_duration(0) == "0m"
    assert format_duration(45) == "45m"
    assert format_duration(125) == "2h 5m"
