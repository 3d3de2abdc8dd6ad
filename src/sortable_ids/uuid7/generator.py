"""
UUIDv7 generator - time-ordered RFC 9562 UUIDs

Composes a ClockSequencer, the UUIDv7 codec and a random source. The
sequence lives in rand_a and restarts at the configured offset every
millisecond; rand_b is 62 fresh random bits per identifier.

Example:
    >>> from sortable_ids import UUIDv7
    >>> v7 = UUIDv7()
    >>> UUIDv7.parse(v7.generate()).version
    7
"""

from sortable_ids.kernel.errors import InvalidIdentifierError
from sortable_ids.kernel.logging import get_logger
from sortable_ids.kernel.metrics import parse_failures_total, track_generation
from sortable_ids.kernel.randomness import RandomSource, default_random_source
from sortable_ids.kernel.sequencer import ClockSequencer
from sortable_ids.kernel.settings import UUIDv7Settings, build_settings
from sortable_ids.kernel.time import Clock
from sortable_ids.uuid7 import codec
from sortable_ids.uuid7.codec import UUIDBinary
from sortable_ids.uuid7.models import UUIDv7Fields

logger = get_logger(__name__)


class UUIDv7:
    """
    UUIDv7 generator

    worker_id is validated and kept for diagnostics but takes no bits of
    its own. Workers that must never collide within a millisecond should
    be given disjoint sequence offsets.
    """

    UUID7_VERSION = codec.UUID7_VERSION
    UUID7_VARIANT = codec.UUID7_VARIANT
    MAX_WORKER_ID = 1023
    MAX_SEQUENCE = 4095

    def __init__(
        self,
        worker_id: int = 0,
        sequence: int = 0,
        *,
        clock: Clock | None = None,
        random_source: RandomSource | None = None,
    ) -> None:
        """
        Initialize generator

        Args:
            worker_id: Worker ID (10 bits, 0-1023)
            sequence: Sequence offset each millisecond starts from (12 bits, 0-4095)
            clock: Millisecond clock (uses the system clock if None)
            random_source: Source of rand_b bits (uses secrets if None)

        Raises:
            InvalidConfigurationError: If any setting is out of range
        """
        self.settings = build_settings(UUIDv7Settings, worker_id=worker_id, sequence=sequence)
        self._sequencer = ClockSequencer(
            offset=self.settings.sequence, clock=clock, scheme=codec.SCHEME
        )
        self._random = random_source or default_random_source
        logger.debug(
            "UUIDv7 generator created",
            worker_id=self.settings.worker_id,
            sequence_offset=self.settings.sequence,
        )

    @property
    def worker_id(self) -> int:
        return self.settings.worker_id

    @property
    def sequence_offset(self) -> int:
        return self.settings.sequence

    def _random_b(self) -> int:
        # Top 62 of the 64 drawn bits
        return self._random.next_u64() >> (64 - codec.RAND_B_BITS)

    @track_generation(codec.SCHEME)
    def generate_binary(self) -> UUIDBinary:
        """
        Generate the next UUID as its (left, right) 64-bit halves

        Raises:
            ClockRegressionError: If the clock moved backwards
            FieldOverflowError: If the clock is outside the 48-bit timestamp range
        """
        timestamp, sequence = self._sequencer.next()
        return codec.pack(timestamp, sequence, self._random_b())

    def generate(self) -> str:
        """Generate the next UUID in canonical lowercase string form"""
        return codec.to_string(self.generate_binary())

    @staticmethod
    def parse(value: str) -> UUIDv7Fields:
        """
        Decode a UUID string into its fields

        Meant for testing and debugging; RFC 9562 recommends treating
        UUIDs as opaque values.

        Raises:
            InvalidIdentifierError: If value does not match the 8-4-4-4-12 grammar
        """
        try:
            return codec.parse(value)
        except InvalidIdentifierError:
            parse_failures_total.labels(scheme=codec.SCHEME).inc()
            raise

    @staticmethod
    def is_valid(value: str) -> bool:
        return codec.is_valid(value)

    def __repr__(self) -> str:
        return f"UUIDv7(worker_id={self.worker_id}, sequence={self.sequence_offset})"
