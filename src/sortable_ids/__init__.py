"""
Sortable IDs - Coordination-free, time-ordered identifiers

Generates 64-bit Snowflake IDs and 128-bit RFC 9562 UUIDv7s from a wall
clock plus a per-generator sequence, so independent workers can mint
sortable primary keys and trace IDs without a central allocator.

Fun fact: Both schemes put the timestamp in the most significant bits, so
sorting the strings sorts by creation time - no extra index required.
"""

from sortable_ids.kernel.errors import (
    ClockRegressionError,
    FieldOverflowError,
    InvalidConfigurationError,
    InvalidIdentifierError,
    SortableIdError,
)
from sortable_ids.kernel.ids import generate_id
from sortable_ids.snowflake import Snowflake, SnowflakeFields
from sortable_ids.uuid7 import UUIDv7, UUIDv7Fields

__version__ = "0.1.0"
__all__ = [
    "Snowflake",
    "SnowflakeFields",
    "UUIDv7",
    "UUIDv7Fields",
    "generate_id",
    "SortableIdError",
    "InvalidConfigurationError",
    "ClockRegressionError",
    "FieldOverflowError",
    "InvalidIdentifierError",
    "__version__",
]
