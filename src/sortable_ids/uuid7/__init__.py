"""
UUIDv7 - RFC 9562 time-ordered UUIDs with a monotonic sequence in rand_a
"""

from sortable_ids.uuid7.generator import UUIDv7
from sortable_ids.uuid7.models import UUIDv7Fields

__all__ = ["UUIDv7", "UUIDv7Fields"]
