"""
Tests for the identifier factories and the clock-regression retry helper
"""

import pytest

from sortable_ids import Snowflake, UUIDv7, generate_id
from sortable_ids.kernel.errors import ClockRegressionError, InvalidConfigurationError
from sortable_ids.kernel.ids import Scheme, create_factory, default_id_factory
from sortable_ids.kernel.retry import retry_on_clock_regression
from sortable_ids.kernel.time import TestClock


class TestFactories:
    """Test scheme selection and the default factory."""

    def test_create_snowflake_factory(self, test_clock: TestClock) -> None:
        factory = create_factory("snowflake", worker_id=12, clock=test_clock)
        assert isinstance(factory, Snowflake)
        assert Snowflake.parse(factory.generate()).worker_id == 12

    def test_create_uuid7_factory(self, test_clock: TestClock) -> None:
        factory = create_factory(Scheme.UUID7, sequence=7, clock=test_clock)
        assert isinstance(factory, UUIDv7)
        assert UUIDv7.parse(factory.generate()).rand_a == 7

    def test_unknown_scheme(self) -> None:
        with pytest.raises(ValueError):
            create_factory("ulid")

    def test_invalid_configuration_propagates(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            create_factory(Scheme.SNOWFLAKE, worker_id=4096)

    def test_generate_id_is_uuid7_and_increasing(self) -> None:
        ids = [generate_id() for _ in range(20)]
        assert all(UUIDv7.is_valid(value) for value in ids)
        assert ids == sorted(ids)
        assert len(set(ids)) == 20

    def test_default_factory_is_shared(self) -> None:
        assert default_id_factory() is default_id_factory()


class TestRetryOnClockRegression:
    """Test the opt-in tenacity retry decorator."""

    def test_recovers_after_clock_catches_up(self, test_clock: TestClock) -> None:
        snowflake = Snowflake(1, clock=test_clock)
        snowflake.generate()
        test_clock.advance_ms(-2)
        attempts: list[int] = []

        @retry_on_clock_regression(max_attempts=5, min_wait_ms=1, max_wait_ms=2)
        def next_id() -> str:
            attempts.append(1)
            if len(attempts) > 1:
                # Clock recovered between attempts
                test_clock.advance_ms(3)
            return snowflake.generate()

        value = next_id()
        assert len(attempts) == 2
        assert Snowflake.parse(value).timestamp == test_clock.now_ms()

    def test_reraises_after_max_attempts(self, test_clock: TestClock) -> None:
        snowflake = Snowflake(1, clock=test_clock)
        snowflake.generate()
        test_clock.advance_ms(-100)
        attempts: list[int] = []

        @retry_on_clock_regression(max_attempts=3, min_wait_ms=1, max_wait_ms=1)
        def next_id() -> str:
            attempts.append(1)
            return snowflake.generate()

        with pytest.raises(ClockRegressionError):
            next_id()
        assert len(attempts) == 3

    def test_other_errors_not_retried(self) -> None:
        attempts: list[int] = []

        @retry_on_clock_regression(max_attempts=3)
        def broken() -> str:
            attempts.append(1)
            raise ValueError("not a clock problem")

        with pytest.raises(ValueError):
            broken()
        assert len(attempts) == 1
