"""focusnote - task tracking and Pomodoro session engine."""

__version__ = "0.1.0"
