"""
Pytest configuration and shared fixtures

Fun fact: The name "conftest" comes from pytest's configuration testing
framework. Files named conftest.py are automatically discovered and their
fixtures are available to all tests in the same directory and subdirectories!
"""

import pytest

from sortable_ids.kernel.randomness import StaticRandomSource
from sortable_ids.kernel.time import TestClock
from tests.helpers import FROZEN_MS


@pytest.fixture
def test_clock() -> TestClock:
    """
    Provide a frozen clock for deterministic tests

    Default time: 2025-03-06T00:00:00.000Z. Time only moves when the test
    advances it, or by one millisecond per overflow-wait pause.
    """
    return TestClock(FROZEN_MS)


@pytest.fixture
def static_random() -> StaticRandomSource:
    """
    Provide a reproducible random source

    Alternating all-ones and a mixed pattern, so consecutive rand_b
    fields differ and every bit position gets exercised.
    """
    return StaticRandomSource([0xFFFFFFFFFFFFFFFF, 0x0123456789ABCDEF])
