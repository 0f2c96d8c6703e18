"""Countdown clocks. One tick of the game is one frame."""

from typing import Protocol

from src.core.exceptions import GameStateError

# Frames per second: the number of game ticks in one second of clock time
FPS = 60


class Tickable(Protocol):
    """Anything that advances with the game loop and ends at some point (clocks, warnings, animations)"""

    def tick(self) -> None: ...
    def is_ended(self) -> bool: ...


class Timer:
    """Counts down in frames. Once the remaining time hits zero the timer is ended."""

    def __init__(self, secs: float, frames_per_second: int = FPS) -> None:
        self.frames_per_second = frames_per_second
        self.remaining_frames = round(secs * frames_per_second)

    def tick(self) -> None:
        if self.is_ended():
            raise GameStateError("Cannot tick a timer that has already ended.")
        self.remaining_frames -= 1

    def add_remaining_secs(self, secs: float) -> None:
        """Positive for increments, negative for penalties."""
        self.remaining_frames += round(secs * self.frames_per_second)

    def is_ended(self) -> bool:
        return self.remaining_frames <= 0

    @property
    def remaining_secs(self) -> float:
        return self.remaining_frames / self.frames_per_second


def format_seconds(seconds: int) -> str:
    """Clock display: 75 -> '1:15'"""
    if seconds < 0:
        raise ValueError(f"Cannot display a negative amount of seconds: {seconds}")
    minutes, seconds = divmod(seconds, 60)
    return f"{minutes}:{seconds:02d}"
