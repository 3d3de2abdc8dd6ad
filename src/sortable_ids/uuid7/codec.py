"""
UUIDv7 codec - RFC 9562 version 7 bit layout

Pure functions only; no clock, no state, no randomness.

     0                   1                   2                   3
     0 1 2 3 4 5 6 7 8 9 0 1 2 3 4 5 6 7 8 9 0 1 2 3 4 5 6 7 8 9 0 1
    +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
    |                           unix_ts_ms                          |
    +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
    |          unix_ts_ms           |  ver  |   rand_a (sequence)   |
    +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
    |var|                        rand_b                             |
    +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
    |                            rand_b                             |
    +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+

The 128 bits travel as two 64-bit halves:
    left  = [timestamp:48][version:4][rand_a:12]
    right = [variant:2][rand_b:62]

rand_a holds the per-millisecond sequence instead of random bits, which
trades 12 bits of unpredictability for monotonic ordering (RFC 9562
section 6.2, method 1).
"""

import re

from sortable_ids.kernel.errors import FieldOverflowError, InvalidIdentifierError
from sortable_ids.uuid7.models import UUIDv7Fields

SCHEME = "uuid7"

UUID7_VERSION = 0b0111
UUID7_VARIANT = 0b10

TIMESTAMP_BITS = 48
VERSION_BITS = 4
RAND_A_BITS = 12
VARIANT_BITS = 2
RAND_B_BITS = 62

VERSION_SHIFT = RAND_A_BITS
TIMESTAMP_SHIFT = VERSION_BITS + RAND_A_BITS
VARIANT_SHIFT = RAND_B_BITS

RAND_A_MASK = (1 << RAND_A_BITS) - 1
RAND_B_MASK = (1 << RAND_B_BITS) - 1
VERSION_MASK = (1 << VERSION_BITS) - 1

UUIDBinary = tuple[int, int]

UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)


def _check_field(name: str, value: int, bits: int) -> None:
    if not 0 <= value < (1 << bits):
        raise FieldOverflowError(name, value, bits)


def pack(
    timestamp: int,
    rand_a: int,
    rand_b: int,
    version: int = UUID7_VERSION,
    variant: int = UUID7_VARIANT,
) -> UUIDBinary:
    """
    Compose the two 64-bit halves of a UUIDv7

    Args:
        timestamp: Unix time in milliseconds (48 bits)
        rand_a: Sequence field (12 bits)
        rand_b: Random field (62 bits)
        version: Version nibble (7 for UUIDv7)
        variant: Variant bits (0b10 for RFC 9562)

    Returns:
        (left, right) unsigned 64-bit halves

    Raises:
        FieldOverflowError: If any field falls outside its width
    """
    _check_field("timestamp", timestamp, TIMESTAMP_BITS)
    _check_field("rand_a", rand_a, RAND_A_BITS)
    _check_field("rand_b", rand_b, RAND_B_BITS)
    _check_field("version", version, VERSION_BITS)
    _check_field("variant", variant, VARIANT_BITS)
    left = (timestamp << TIMESTAMP_SHIFT) | (version << VERSION_SHIFT) | rand_a
    right = (variant << VARIANT_SHIFT) | rand_b
    return left, right


def unpack(left: int, right: int) -> UUIDv7Fields:
    """
    Split the two 64-bit halves into their fields

    Raises:
        InvalidIdentifierError: If either half is not an unsigned 64-bit integer
    """
    for half in (left, right):
        if isinstance(half, bool) or not isinstance(half, int) or not 0 <= half < (1 << 64):
            raise InvalidIdentifierError(
                (left, right), SCHEME, "halves must be unsigned 64-bit integers"
            )
    return UUIDv7Fields(
        timestamp=left >> TIMESTAMP_SHIFT,
        version=(left >> VERSION_SHIFT) & VERSION_MASK,
        variant=right >> VARIANT_SHIFT,
        rand_a=left & RAND_A_MASK,
        rand_b=right & RAND_B_MASK,
        binary=(left, right),
    )


def to_string(binary: UUIDBinary) -> str:
    """Canonical lowercase 8-4-4-4-12 form"""
    left, right = binary
    digits = f"{left:016x}{right:016x}"
    return f"{digits[:8]}-{digits[8:12]}-{digits[12:16]}-{digits[16:20]}-{digits[20:]}"


def is_valid(value: str) -> bool:
    """
    Check the 8-4-4-4-12 hex grammar (case-insensitive)

    Compact hex, braces, URNs and other groupings are rejected.
    """
    return isinstance(value, str) and UUID_PATTERN.fullmatch(value) is not None


def from_string(text: str) -> UUIDBinary:
    """
    Parse the canonical string form into (left, right)

    Raises:
        InvalidIdentifierError: If text does not match the 8-4-4-4-12 grammar
    """
    if not is_valid(text):
        raise InvalidIdentifierError(text, SCHEME, "expected 8-4-4-4-12 hex groups")
    digits = text.replace("-", "")
    return int(digits[:16], 16), int(digits[16:], 16)


def parse(text: str) -> UUIDv7Fields:
    """Decode a UUIDv7 string into its fields"""
    return unpack(*from_string(text))
