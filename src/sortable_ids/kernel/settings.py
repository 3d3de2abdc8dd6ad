"""
Generator settings - validated construction parameters

Every generator is configured once and never reconfigured. These models
hold the bounds for worker IDs, sequence offsets and epochs, and turn
pydantic validation failures into InvalidConfigurationError.

Fun fact: The default Snowflake epoch, 1288834974657, is
2010-11-04T01:42:54.657Z - the moment Twitter picked for its own IDs.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sortable_ids.kernel.errors import InvalidConfigurationError

WORKER_ID_BITS = 10
SEQUENCE_BITS = 12
MAX_WORKER_ID = (1 << WORKER_ID_BITS) - 1
MAX_SEQUENCE = (1 << SEQUENCE_BITS) - 1

TWITTER_EPOCH_MS = 1288834974657


class GeneratorSettings(BaseModel):
    """
    Settings shared by both generator families

    sequence is the offset the per-millisecond counter restarts from.
    Workers sharing a UUIDv7 deployment can pick disjoint offsets.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

    worker_id: int = Field(
        default=0,
        ge=0,
        le=MAX_WORKER_ID,
        description="Identity of the producing process (10 bits)",
    )

    sequence: int = Field(
        default=0,
        ge=0,
        le=MAX_SEQUENCE,
        description="Sequence offset used at the start of each millisecond (12 bits)",
    )


class SnowflakeSettings(GeneratorSettings):
    """Snowflake settings - adds the custom epoch"""

    epoch: int = Field(
        default=TWITTER_EPOCH_MS,
        ge=0,
        description="Unix milliseconds subtracted before encoding the timestamp",
    )


class UUIDv7Settings(GeneratorSettings):
    """UUIDv7 settings - timestamps are always relative to the Unix epoch"""

    pass


class ClockSettings(BaseModel):
    """Settings for the real clock used in production"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    poll_interval_ms: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Sleep between clock reads during an overflow wait (0 = busy-spin)",
    )


_BOUNDS: dict[str, tuple[int, int]] = {
    "worker_id": (0, MAX_WORKER_ID),
    "sequence": (0, MAX_SEQUENCE),
}

S = TypeVar("S", bound=BaseModel)


def build_settings(model: type[S], **values: Any) -> S:
    """
    Validate settings, raising InvalidConfigurationError on the first bad field

    Args:
        model: Settings model class
        **values: Field values

    Returns:
        Frozen settings instance
    """
    try:
        return model(**values)
    except ValidationError as exc:
        error = exc.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else model.__name__
        minimum, maximum = _BOUNDS.get(field, (None, None))
        raise InvalidConfigurationError(
            field,
            values.get(field),
            minimum,
            maximum,
            message=(
                ""
                if minimum is not None
                else f"Invalid {field}: {values.get(field)!r} ({error['msg']})"
            ),
        ) from exc
