"""
Snowflake generator - 64-bit time-ordered identifiers

Composes a ClockSequencer with the Snowflake codec. Worker ID and epoch
are fixed at construction.

Example:
    >>> from sortable_ids import Snowflake
    >>> snowflake = Snowflake(worker_id=1)
    >>> sid = snowflake.generate()
    >>> Snowflake.parse(sid).worker_id
    1
"""

from sortable_ids.kernel.errors import InvalidIdentifierError
from sortable_ids.kernel.logging import get_logger
from sortable_ids.kernel.metrics import parse_failures_total, track_generation
from sortable_ids.kernel.sequencer import ClockSequencer
from sortable_ids.kernel.settings import SnowflakeSettings, build_settings
from sortable_ids.kernel.time import Clock
from sortable_ids.snowflake import codec
from sortable_ids.snowflake.models import SnowflakeFields

logger = get_logger(__name__)


class Snowflake:
    """
    Snowflake identifier generator

    One instance per worker. The sequencer is locked internally, so an
    instance may be shared between threads.
    """

    EPOCH = codec.EPOCH
    MAX_WORKER_ID = 1023
    MAX_SEQUENCE = 4095

    def __init__(
        self,
        worker_id: int,
        sequence: int = 0,
        *,
        epoch: int = codec.EPOCH,
        clock: Clock | None = None,
    ) -> None:
        """
        Initialize generator

        Args:
            worker_id: Worker ID (10 bits, 0-1023)
            sequence: Initial sequence value (12 bits, 0-4095); every new
                millisecond restarts at 0
            epoch: Custom epoch in Unix milliseconds
            clock: Millisecond clock (uses the system clock if None)

        Raises:
            InvalidConfigurationError: If any setting is out of range
        """
        self.settings = build_settings(
            SnowflakeSettings, worker_id=worker_id, sequence=sequence, epoch=epoch
        )
        self._sequencer = ClockSequencer(
            offset=0, clock=clock, scheme=codec.SCHEME, initial=self.settings.sequence
        )
        logger.debug(
            "Snowflake generator created",
            worker_id=self.settings.worker_id,
            initial_sequence=self.settings.sequence,
            epoch=self.settings.epoch,
        )

    @property
    def worker_id(self) -> int:
        return self.settings.worker_id

    @property
    def initial_sequence(self) -> int:
        return self.settings.sequence

    @property
    def epoch(self) -> int:
        return self.settings.epoch

    @track_generation(codec.SCHEME)
    def generate_binary(self) -> int:
        """
        Generate the next identifier as an integer

        Raises:
            ClockRegressionError: If the clock moved backwards
            FieldOverflowError: If the clock is outside the 41-bit range of the epoch
        """
        timestamp, sequence = self._sequencer.next()
        return codec.pack(timestamp, self.settings.worker_id, sequence, self.settings.epoch)

    def generate(self) -> str:
        """Generate the next identifier as a base-10 string"""
        return codec.to_string(self.generate_binary())

    @staticmethod
    def parse(value: str | int, epoch: int = codec.EPOCH) -> SnowflakeFields:
        """
        Decode an identifier into timestamp, worker ID, sequence and binary form

        Raises:
            InvalidIdentifierError: If value is not an unsigned 64-bit integer
        """
        try:
            return codec.parse(value, epoch)
        except InvalidIdentifierError:
            parse_failures_total.labels(scheme=codec.SCHEME).inc()
            raise

    @staticmethod
    def is_valid(value: str | int) -> bool:
        return codec.is_valid(value)

    @staticmethod
    def to_binary_string(value: str | int) -> str:
        """Zero-padded 64-character binary form of an identifier"""
        return codec.parse(value).binary

    def __repr__(self) -> str:
        return f"Snowflake(worker_id={self.worker_id}, sequence={self.initial_sequence}, epoch={self.epoch})"
