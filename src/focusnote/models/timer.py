"""Ephemeral Pomodoro timer state."""

from dataclasses import asdict, dataclass
from typing import Literal

from focusnote.models.core import SessionType

TimerPhase = Literal["idle", "running", "paused", "completed"]


@dataclass
class TimerState:
    """Countdown state owned by the timer engine. Never persisted."""

    is_running: bool = False
    is_paused: bool = False
    time_remaining: int = 25 * 60  # seconds
    total_time: int = 25 * 60  # seconds
    session_type: SessionType = "pomodoro"
    completed_pomodoros: int = 0

    @classmethod
    def for_duration(cls, minutes: int, completed_pomodoros: int = 0) -> "TimerState":
        """Create an idle state with a full countdown of *minutes*."""
        seconds = minutes * 60
        return cls(
            time_remaining=seconds,
            total_time=seconds,
            completed_pomodoros=completed_pomodoros,
        )

    @property
    def phase(self) -> TimerPhase:
        if self.is_running:
            return "paused" if self.is_paused else "running"
        if self.time_remaining <= 0:
            return "completed"
        return "idle"

    @property
    def formatted_remaining(self) -> str:
        """Remaining time as MM:SS."""
        remaining = max(0, self.time_remaining)
        mins, secs = divmod(remaining, 60)
        return f"{mins:02d}:{secs:02d}"

    @property
    def progress(self) -> float:
        """Percentage of the countdown already elapsed."""
        if self.total_time <= 0:
            return 0.0
        elapsed = self.total_time - max(0, self.time_remaining)
        return min(100.0, elapsed / self.total_time * 100)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["phase"] = self.phase
        return data
