"""
Snowflake codec - 64-bit bit layout

Pure functions only; no clock, no state.

Layout, most significant bit first:

     0                   1                   2                   3
     0 1 2 3 4 5 6 7 8 9 0 1 2 3 4 5 6 7 8 9 0 1 2 3 4 5 6 7 8 9 0 1
    +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
    |0|                      Timestamp (41)                         |
    +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
    |  Timestamp (41)   |   Worker ID (10)  |     Sequence (12)     |
    +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+

The sign bit is always 0 for generated values, so every identifier also
fits a signed 64-bit column. 41 bits of milliseconds last about 69 years
past the epoch.
"""

import re

from sortable_ids.kernel.errors import FieldOverflowError, InvalidIdentifierError
from sortable_ids.kernel.settings import SEQUENCE_BITS, TWITTER_EPOCH_MS, WORKER_ID_BITS
from sortable_ids.snowflake.models import SnowflakeFields

SCHEME = "snowflake"

EPOCH = TWITTER_EPOCH_MS
ID_BITS = 64
TIMESTAMP_BITS = 41
WORKER_ID_SHIFT = SEQUENCE_BITS
TIMESTAMP_SHIFT = WORKER_ID_BITS + SEQUENCE_BITS

MAX_ID = (1 << ID_BITS) - 1
# Decimal digits in MAX_ID; longer text is rejected before int()
MAX_DIGITS = len(str(MAX_ID))

# Canonical base-10 form: no sign, no leading zeros
_DECIMAL = re.compile(r"0|[1-9][0-9]*")


def _check_field(name: str, value: int, bits: int) -> None:
    if not 0 <= value < (1 << bits):
        raise FieldOverflowError(name, value, bits)


def pack(timestamp: int, worker_id: int, sequence: int, epoch: int = EPOCH) -> int:
    """
    Compose a Snowflake identifier

    Args:
        timestamp: Unix time in milliseconds
        worker_id: Worker ID (10 bits)
        sequence: Sequence number (12 bits)
        epoch: Unix milliseconds subtracted from the timestamp

    Returns:
        Non-negative 64-bit integer with the sign bit clear

    Raises:
        FieldOverflowError: If any field falls outside its width
    """
    relative = timestamp - epoch
    _check_field("timestamp", relative, TIMESTAMP_BITS)
    _check_field("worker_id", worker_id, WORKER_ID_BITS)
    _check_field("sequence", sequence, SEQUENCE_BITS)
    return (relative << TIMESTAMP_SHIFT) | (worker_id << WORKER_ID_SHIFT) | sequence


def to_binary_string(value: int) -> str:
    """Zero-padded 64-character binary form"""
    return format(value, "064b")


def unpack(value: int, epoch: int = EPOCH) -> SnowflakeFields:
    """
    Split a Snowflake identifier into its fields

    The sign bit is ignored. The returned timestamp is absolute.

    Raises:
        InvalidIdentifierError: If value is not an unsigned 64-bit integer
    """
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_ID:
        raise InvalidIdentifierError(value, SCHEME, "not an unsigned 64-bit integer")
    binary = to_binary_string(value)
    return SnowflakeFields(
        timestamp=int(binary[1:42], 2) + epoch,
        worker_id=int(binary[42:52], 2),
        sequence=int(binary[52:], 2),
        binary=binary,
    )


def to_string(value: int) -> str:
    """Canonical base-10 string form"""
    return str(value)


def from_string(text: str) -> int:
    """
    Parse the canonical base-10 form

    Raises:
        InvalidIdentifierError: On non-decimal text, leading zeros or values over 64 bits
    """
    if not isinstance(text, str) or not _DECIMAL.fullmatch(text):
        raise InvalidIdentifierError(text, SCHEME, "expected base-10 digits")
    if len(text) > MAX_DIGITS:
        raise InvalidIdentifierError(text, SCHEME, "wider than 64 bits")
    value = int(text)
    if value > MAX_ID:
        raise InvalidIdentifierError(text, SCHEME, "wider than 64 bits")
    return value


def is_valid(value: str | int) -> bool:
    """
    Check that value round-trips as an unsigned 64-bit integer

    Worker ID plausibility is not checked.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return 0 <= value <= MAX_ID
    if isinstance(value, str):
        return (
            len(value) <= MAX_DIGITS
            and bool(_DECIMAL.fullmatch(value))
            and int(value) <= MAX_ID
        )
    return False


def parse(value: str | int, epoch: int = EPOCH) -> SnowflakeFields:
    """Decode a Snowflake identifier given as a string or an integer"""
    if isinstance(value, str):
        value = from_string(value)
    return unpack(value, epoch)
