"""
Test Helper Functions - Constants and Assertions

Shared values and custom assertions for identifier ordering tests.
"""

from collections.abc import Sequence

# 2025-03-06T00:00:00.000Z
FROZEN_MS = 1741219200000

# Example instant used by the UUIDv7 decoding checks
UUID7_EXAMPLE_MS = 1716093634155


def assert_strictly_increasing(values: Sequence) -> None:
    """
    Custom assertion for monotonic identifier sequences

    Args:
        values: Identifiers (ints, strings or tuples) in generation order

    Raises:
        AssertionError: Naming the first out-of-order pair
    """
    for index, (previous, current) in enumerate(zip(values, values[1:])):
        if not previous < current:
            raise AssertionError(
                f"Values not strictly increasing at index {index + 1}:\n"
                f"  Previous: {previous!r}\n"
                f"  Current:  {current!r}"
            )
