"""
Tick schedulers.

The game controller never owns a timer directly: it is handed a Scheduler
and asks it to call back once per frame. ManualScheduler lets tests and
tools drive ticks synthetically.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional

TickCallback = Callable[[], None]


class Scheduler(ABC):
    """Invokes a tick callback at a fixed nominal interval."""

    @abstractmethod
    def start(self, callback: TickCallback, interval_ms: float) -> None:
        """
        Begin invoking callback every interval_ms milliseconds.

        Args:
            callback: Called once per tick with no arguments
            interval_ms: Nominal interval between ticks
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop invoking the callback. Calling stop twice is harmless."""
        pass

    @property
    @abstractmethod
    def running(self) -> bool:
        """Whether a callback is currently scheduled."""
        pass


class ManualScheduler(Scheduler):
    """Scheduler that only ticks when advance() is called."""

    def __init__(self):
        self._callback: Optional[TickCallback] = None
        self.interval_ms: float = 0.0
        self.ticks: int = 0

    def start(self, callback: TickCallback, interval_ms: float) -> None:
        self._callback = callback
        self.interval_ms = interval_ms

    def stop(self) -> None:
        self._callback = None

    @property
    def running(self) -> bool:
        return self._callback is not None

    def advance(self, ticks: int = 1) -> int:
        """
        Run up to `ticks` callbacks.

        Stops early if a callback stops the scheduler.

        Returns:
            Number of callbacks actually run
        """
        ran = 0
        for _ in range(ticks):
            if self._callback is None:
                break
            self._callback()
            self.ticks += 1
            ran += 1
        return ran
