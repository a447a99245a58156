# src/stageview/core/clock.py
"""Clock abstraction for testable "now" handling.

In-progress runs are measured against the wall clock, so every summary
reads the current time once through a Clock. Production code uses
SystemClock (the default), or FixedClock when an observation time is
supplied explicitly; tests inject MockClock to pin and move the time.
"""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Source of the current observation time."""

    def now_millis(self) -> int:
        """Return wall-clock time in epoch milliseconds."""
        ...


class SystemClock:
    """Production clock using time.time_ns()."""

    def now_millis(self) -> int:
        """Return system wall-clock time in milliseconds."""
        return time.time_ns() // 1_000_000


class FixedClock:
    """Clock pinned to one observation time, e.g. a CLI --now value."""

    def __init__(self, millis: int) -> None:
        if millis < 0:
            raise ValueError(f"Observation time must be non-negative: {millis}")
        self._millis = millis

    def now_millis(self) -> int:
        return self._millis


class MockClock:
    """Controllable clock for deterministic testing.

    Example:
        clock = MockClock(start=9000)
        summary = RunSummarizer(clock=clock).summarize(run)
        assert summary.end_time_millis == 9000

        clock.advance(500)
        assert clock.now_millis() == 9500
    """

    def __init__(self, start: int = 0) -> None:
        """Initialize mock clock at a given time.

        Args:
            start: Initial time in epoch milliseconds (default 0).
        """
        self._current = start

    def now_millis(self) -> int:
        """Return current mock time."""
        return self._current

    def advance(self, millis: int) -> None:
        """Advance mock time by specified milliseconds.

        Raises:
            ValueError: If millis is negative.
        """
        if millis < 0:
            raise ValueError(f"Cannot advance time by negative amount: {millis}")
        self._current += millis

    def set(self, value: int) -> None:
        """Set mock time to an absolute value (may move backwards)."""
        self._current = value


# Default clock for production use
DEFAULT_CLOCK: Clock = SystemClock()
