"""Tests for the Clock abstraction (SystemClock, FixedClock, MockClock, DEFAULT_CLOCK)."""

import time

import pytest

from stageview.core.clock import DEFAULT_CLOCK, FixedClock, MockClock, SystemClock


class TestSystemClock:
    def test_returns_epoch_millis(self) -> None:
        before = int(time.time() * 1000)
        now = SystemClock().now_millis()
        after = int(time.time() * 1000)

        assert isinstance(now, int)
        assert before - 1 <= now <= after + 1

    def test_default_clock_is_system_clock(self) -> None:
        assert isinstance(DEFAULT_CLOCK, SystemClock)


class TestFixedClock:
    def test_always_returns_pinned_time(self) -> None:
        clock = FixedClock(1_700_000_000_000)

        assert clock.now_millis() == 1_700_000_000_000
        assert clock.now_millis() == 1_700_000_000_000

    def test_negative_time_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            FixedClock(-1)


class TestMockClock:
    def test_starts_at_given_time(self) -> None:
        assert MockClock(start=9000).now_millis() == 9000

    def test_default_start_zero(self) -> None:
        assert MockClock().now_millis() == 0

    def test_advance(self) -> None:
        clock = MockClock(start=100)
        clock.advance(50)

        assert clock.now_millis() == 150

    def test_advance_negative_rejected(self) -> None:
        with pytest.raises(ValueError, match="negative"):
            MockClock().advance(-1)

    def test_set_can_go_backwards(self) -> None:
        clock = MockClock(start=100)
        clock.set(10)

        assert clock.now_millis() == 10
