"""
Tests for generator settings validation
"""

import pytest
from pydantic import ValidationError

from sortable_ids.kernel.errors import InvalidConfigurationError
from sortable_ids.kernel.settings import (
    ClockSettings,
    GeneratorSettings,
    SnowflakeSettings,
    TWITTER_EPOCH_MS,
    UUIDv7Settings,
    build_settings,
)


def test_defaults() -> None:
    """Test default worker, offset and epoch"""
    settings = SnowflakeSettings()
    assert settings.worker_id == 0
    assert settings.sequence == 0
    assert settings.epoch == TWITTER_EPOCH_MS == 1288834974657


def test_bounds_are_inclusive() -> None:
    """Test the extreme valid values are accepted"""
    settings = build_settings(UUIDv7Settings, worker_id=1023, sequence=4095)
    assert (settings.worker_id, settings.sequence) == (1023, 4095)


def test_settings_are_frozen() -> None:
    """Test settings cannot change after construction"""
    settings = GeneratorSettings(worker_id=1)
    with pytest.raises(ValidationError):
        settings.worker_id = 2  # type: ignore[misc]


def test_unknown_fields_rejected() -> None:
    """Test typos in setting names fail instead of being ignored"""
    with pytest.raises(InvalidConfigurationError):
        build_settings(GeneratorSettings, worker=1)


def test_build_settings_translates_validation_error() -> None:
    """Test pydantic errors become InvalidConfigurationError with bounds"""
    with pytest.raises(InvalidConfigurationError) as exc_info:
        build_settings(SnowflakeSettings, worker_id=2000)

    error = exc_info.value
    assert error.field == "worker_id"
    assert error.value == 2000
    assert (error.minimum, error.maximum) == (0, 1023)
    assert "between 0 and 1023" in str(error)
    assert isinstance(error.__cause__, ValidationError)


def test_bool_is_not_a_worker_id() -> None:
    """Test strict mode refuses booleans"""
    with pytest.raises(InvalidConfigurationError):
        build_settings(GeneratorSettings, worker_id=True)


def test_clock_settings_bounds() -> None:
    """Test poll interval stays within one millisecond"""
    assert ClockSettings().poll_interval_ms == 0.0
    with pytest.raises(ValidationError):
        ClockSettings(poll_interval_ms=5)
