"""
Clock abstraction for deterministic testing

Provides both a real-time and a controllable test-time implementation,
so sequencer behavior (same-millisecond bursts, overflow waits, clock
regression) can be exercised without depending on the wall clock.

Fun fact: Unix time ignores leap seconds entirely - a day is always
86,400 seconds here, even when the Earth disagrees.
"""

import time
from datetime import datetime, timedelta, timezone
from typing import Protocol

from sortable_ids.kernel.settings import ClockSettings, build_settings

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def ms_to_datetime(timestamp_ms: int) -> datetime | None:
    """
    Convert Unix milliseconds to an aware UTC datetime

    Returns None when the value lies outside what datetime can hold
    (years 1 to 9999); a 48-bit UUIDv7 timestamp reaches year 10889.
    """
    try:
        return UNIX_EPOCH + timedelta(milliseconds=timestamp_ms)
    except OverflowError:
        return None


class Clock(Protocol):
    """Protocol for millisecond clocks - allows deterministic testing"""

    def now_ms(self) -> int:
        """Return current Unix time in whole milliseconds"""
        ...

    def pause(self) -> None:
        """Yield while waiting for the next millisecond"""
        ...


class RealClock:
    """
    Production clock using the system wall clock

    The overflow wait calls pause() between reads. With the default
    poll interval of 0 this is a busy-spin; a positive interval turns
    it into sleep-and-recheck.
    """

    def __init__(self, poll_interval_ms: float = 0.0) -> None:
        self.settings = build_settings(ClockSettings, poll_interval_ms=poll_interval_ms)

    @property
    def poll_interval_ms(self) -> float:
        return self.settings.poll_interval_ms

    def now_ms(self) -> int:
        """Return current Unix time in milliseconds from the system clock"""
        return time.time_ns() // 1_000_000

    def pause(self) -> None:
        if self.poll_interval_ms > 0:
            time.sleep(self.poll_interval_ms / 1000.0)


class TestClock:
    """
    Controllable clock for deterministic tests

    Time stays frozen until the test moves it. Every pause() stands in
    for real time passing and advances the clock by one millisecond,
    so overflow waits always resolve.
    """

    __test__ = False  # keep pytest from collecting this class

    def __init__(self, initial_ms: int = 0) -> None:
        """
        Initialize with optional fixed time

        Args:
            initial_ms: Starting Unix time in milliseconds (defaults to epoch)
        """
        self._current_ms = initial_ms
        self.pauses = 0

    def now_ms(self) -> int:
        """Return current test time"""
        return self._current_ms

    def pause(self) -> None:
        self.pauses += 1
        self._current_ms += 1

    def set_ms(self, value: int) -> None:
        """Set current time to a specific millisecond"""
        self._current_ms = value

    def advance_ms(self, ms: int = 1) -> None:
        """Advance (or with a negative value, rewind) time by milliseconds"""
        self._current_ms += ms


# Global default clock
default_clock: Clock = RealClock()
