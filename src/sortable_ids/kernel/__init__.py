"""
Kernel - Shared machinery behind both identifier schemes

The kernel holds the clock and random-source abstractions, the sequencer
state machine, validated settings, and the ambient logging, metrics and
error types that the Snowflake and UUIDv7 packages build upon.

Fun fact: Lamport clocks (1978) gave distributed systems ordering without
wall clocks; Snowflake-style IDs go the other way and trust the wall clock,
which is exactly why clock regression is the one error they cannot absorb.
"""

from sortable_ids.kernel.errors import (
    ClockRegressionError,
    FieldOverflowError,
    InvalidConfigurationError,
    InvalidIdentifierError,
    SortableIdError,
)
from sortable_ids.kernel.ids import IdFactory, Scheme, create_factory, generate_id
from sortable_ids.kernel.randomness import RandomSource, StaticRandomSource, SystemRandomSource
from sortable_ids.kernel.sequencer import ClockSequencer
from sortable_ids.kernel.time import Clock, RealClock, TestClock

__all__ = [
    # IDs
    "IdFactory",
    "Scheme",
    "create_factory",
    "generate_id",
    # Time
    "Clock",
    "RealClock",
    "TestClock",
    # Randomness
    "RandomSource",
    "SystemRandomSource",
    "StaticRandomSource",
    # Sequencing
    "ClockSequencer",
    # Errors
    "SortableIdError",
    "InvalidConfigurationError",
    "ClockRegressionError",
    "FieldOverflowError",
    "InvalidIdentifierError",
]
