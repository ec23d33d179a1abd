"""Clocks used by the wait engine.

SystemClock uses the real monotonic clock. VirtualClock advances only when
slept on, which makes deadline behavior testable without real waiting.
"""

import time
from abc import ABC, abstractmethod


class Clock(ABC):
    """Source of monotonic time and sleeping."""

    @abstractmethod
    def monotonic(self) -> float:
        """Return monotonic time in seconds."""

    @abstractmethod
    def sleep(self, seconds: float) -> None:
        """Block for ``seconds``."""


class SystemClock(Clock):
    """Real time."""

    def monotonic(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)


class VirtualClock(Clock):
    """Virtual clock for deterministic tests.

    Sleeping returns instantly and advances the virtual time. ``advance`` lets
    a predicate simulate time spent inside a remote call.

    Attributes:
        now: Current virtual time
        sleeps: Every duration passed to sleep, in order
    """

    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds

    @property
    def total_slept(self) -> float:
        return sum(self.sleeps)
