"""
Tests for the Snowflake generator

Verifies uniqueness and ordering within and across milliseconds,
worker separation, overflow behavior and construction checks.
"""

import pytest

from sortable_ids import Snowflake
from sortable_ids.kernel.errors import (
    ClockRegressionError,
    FieldOverflowError,
    InvalidConfigurationError,
    InvalidIdentifierError,
)
from sortable_ids.kernel.time import TestClock
from tests.helpers import FROZEN_MS, assert_strictly_increasing


def test_first_and_second_call_decode(test_clock: TestClock) -> None:
    """Test worker 123 decodes to sequence 0 then 1 at a frozen instant"""
    snowflake = Snowflake(123, clock=test_clock)

    first = Snowflake.parse(snowflake.generate())
    second = Snowflake.parse(snowflake.generate())

    assert (first.timestamp, first.worker_id, first.sequence) == (FROZEN_MS, 123, 0)
    assert (second.timestamp, second.worker_id, second.sequence) == (FROZEN_MS, 123, 1)


def test_unique_ids_in_same_timestamp_window(test_clock: TestClock) -> None:
    """Test same-millisecond IDs differ only in sequence"""
    snowflake = Snowflake(1, clock=test_clock)
    id1 = snowflake.generate()
    id2 = snowflake.generate()
    parsed1 = Snowflake.parse(id1)
    parsed2 = Snowflake.parse(id2)

    assert id1 != id2
    assert len(parsed1.binary) == 64
    assert parsed1.timestamp == parsed2.timestamp
    assert parsed1.sequence < parsed2.sequence
    assert int(id1) < int(id2)


def test_unique_ids_in_different_timestamp_windows(test_clock: TestClock) -> None:
    """Test a new millisecond restarts the sequence with a larger timestamp"""
    snowflake = Snowflake(1, clock=test_clock)
    id1 = snowflake.generate()
    test_clock.advance_ms(1)
    id2 = snowflake.generate()
    parsed1 = Snowflake.parse(id1)
    parsed2 = Snowflake.parse(id2)

    assert parsed1.binary != parsed2.binary
    assert parsed1.timestamp < parsed2.timestamp
    assert parsed1.sequence == parsed2.sequence == 0
    assert int(id1) < int(id2)


def test_different_workers_produce_different_ids(test_clock: TestClock) -> None:
    """Test two workers at the same frozen instant never collide"""
    id1 = Snowflake(1, clock=test_clock).generate()
    id2 = Snowflake(2, clock=test_clock).generate()

    assert id1 != id2
    assert Snowflake.parse(id1).worker_id == 1
    assert Snowflake.parse(id2).worker_id == 2


def test_sequence_uses_12_bits(test_clock: TestClock) -> None:
    """Test every call in a frozen millisecond bumps the sequence by one"""
    snowflake = Snowflake(1, clock=test_clock)
    prev = snowflake.generate()
    for i in range(4095):
        current = snowflake.generate()
        assert Snowflake.parse(current).sequence == i + 1
        assert int(current) > int(prev)
        prev = current


def test_overflow_moves_to_next_millisecond(test_clock: TestClock) -> None:
    """Test the 4097th call in one frozen millisecond has a larger timestamp"""
    snowflake = Snowflake(7, clock=test_clock)
    ids = [snowflake.generate() for _ in range(4097)]

    first = Snowflake.parse(ids[0])
    last = Snowflake.parse(ids[-1])
    assert test_clock.pauses >= 1
    assert last.timestamp > first.timestamp
    assert last.sequence == 0
    assert len(set(ids)) == 4097


def test_advancing_clock_orders_numerically_and_lexicographically(
    test_clock: TestClock,
) -> None:
    """Test ordering across an advancing clock, as ints and as strings"""
    snowflake = Snowflake(5, clock=test_clock)
    ids = []
    for step in range(50):
        ids.append(snowflake.generate())
        if step % 3 == 0:
            test_clock.advance_ms(step)

    assert_strictly_increasing([int(value) for value in ids])
    # Same digit count at this epoch offset, so string order matches
    assert_strictly_increasing(ids)


def test_generate_binary_matches_string(test_clock: TestClock) -> None:
    """Test generate_binary returns the integer behind generate()"""
    snowflake = Snowflake(3, clock=test_clock)
    value = snowflake.generate_binary()
    assert isinstance(value, int)
    assert int(snowflake.generate()) == value + 1


def test_clock_regression_propagates(test_clock: TestClock) -> None:
    """Test backwards clock surfaces to the caller"""
    snowflake = Snowflake(1, clock=test_clock)
    snowflake.generate()
    test_clock.advance_ms(-10)

    with pytest.raises(ClockRegressionError):
        snowflake.generate()


def test_clock_before_epoch_overflows() -> None:
    """Test a clock earlier than the epoch cannot be encoded"""
    snowflake = Snowflake(1, clock=TestClock(Snowflake.EPOCH - 1))
    with pytest.raises(FieldOverflowError):
        snowflake.generate()


def test_custom_epoch_round_trip(test_clock: TestClock) -> None:
    """Test a generator with its own epoch decodes with the same epoch"""
    epoch = FROZEN_MS - 1000
    snowflake = Snowflake(9, epoch=epoch, clock=test_clock)
    value = snowflake.generate_binary()

    assert value >> 22 == 1000
    assert Snowflake.parse(value, epoch=epoch).timestamp == FROZEN_MS


@pytest.mark.parametrize("worker_id", [-1, 1024, 5000])
def test_invalid_worker_id(worker_id: int) -> None:
    """Test worker ID outside 0-1023 is rejected"""
    with pytest.raises(InvalidConfigurationError) as exc_info:
        Snowflake(worker_id)
    assert exc_info.value.field == "worker_id"
    assert exc_info.value.maximum == 1023


@pytest.mark.parametrize("sequence", [-1, 4096])
def test_invalid_sequence(sequence: int) -> None:
    """Test sequence outside 0-4095 is rejected"""
    with pytest.raises(InvalidConfigurationError) as exc_info:
        Snowflake(1, sequence)
    assert exc_info.value.field == "sequence"


def test_sequence_argument_does_not_offset_milliseconds(test_clock: TestClock) -> None:
    """Test every millisecond starts at sequence 0 whatever the constructor got"""
    snowflake = Snowflake(1, sequence=4000, clock=test_clock)
    assert snowflake.initial_sequence == 4000

    sequences = [Snowflake.parse(snowflake.generate()).sequence for _ in range(2)]
    test_clock.advance_ms(1)
    sequences.append(Snowflake.parse(snowflake.generate()).sequence)

    assert sequences == [0, 1, 0]


def test_full_millisecond_capacity_with_sequence_argument(test_clock: TestClock) -> None:
    """Test a non-zero sequence argument still leaves 4096 slots per millisecond"""
    snowflake = Snowflake(1, sequence=4000, clock=test_clock)
    for _ in range(4096):
        snowflake.generate()
    assert test_clock.pauses == 0

    snowflake.generate()
    assert test_clock.pauses == 1


def test_non_integer_worker_id_rejected() -> None:
    """Test strict settings refuse strings and floats"""
    with pytest.raises(InvalidConfigurationError):
        Snowflake("1")  # type: ignore[arg-type]
    with pytest.raises(InvalidConfigurationError):
        Snowflake(1.0)  # type: ignore[arg-type]


def test_negative_epoch_rejected() -> None:
    """Test epoch must be a non-negative Unix millisecond value"""
    with pytest.raises(InvalidConfigurationError) as exc_info:
        Snowflake(1, epoch=-1)
    assert exc_info.value.field == "epoch"


def test_worker_id_is_read_only(test_clock: TestClock) -> None:
    """Test worker ID cannot be reassigned after construction"""
    snowflake = Snowflake(4, clock=test_clock)
    with pytest.raises(AttributeError):
        snowflake.worker_id = 5  # type: ignore[misc]
    assert snowflake.worker_id == 4


@pytest.mark.parametrize(
    "value", ["", "abc", "-5", "12.5", "0x1f", str(1 << 64), "1" * 5000]
)
def test_parse_rejects_malformed(value: str) -> None:
    """Test parse raises InvalidIdentifierError on bad input"""
    assert not Snowflake.is_valid(value)
    with pytest.raises(InvalidIdentifierError):
        Snowflake.parse(value)


def test_to_binary_string_pads_to_64_bits() -> None:
    """Test binary helper pads small values"""
    assert Snowflake.to_binary_string("1") == "0" * 63 + "1"
