"""
Identifier factories - one entry point for both schemes

Callers that only need "a sortable ID" use generate_id(); callers that
pick a scheme at runtime (the CLI, config-driven services) use
create_factory().

Fun fact: There are 2^62 possible rand_b values per millisecond and
sequence slot - guessing the next UUID is harder than guessing a
password made of 10 random printable characters.
"""

import threading
from enum import Enum
from typing import Protocol

from sortable_ids.kernel.time import Clock


class IdFactory(Protocol):
    """Protocol for ID generation strategies"""

    def generate(self) -> str:
        """Generate a new unique ID"""
        ...


class Scheme(str, Enum):
    """Supported identifier schemes"""

    SNOWFLAKE = "snowflake"
    UUID7 = "uuid7"


def create_factory(
    scheme: Scheme | str,
    worker_id: int = 0,
    sequence: int = 0,
    clock: Clock | None = None,
) -> IdFactory:
    """
    Build a generator for the given scheme

    Args:
        scheme: "snowflake" or "uuid7"
        worker_id: Worker ID (10 bits)
        sequence: Sequence offset for UUIDv7, initial sequence for Snowflake (12 bits)
        clock: Millisecond clock (uses the system clock if None)

    Raises:
        InvalidConfigurationError: If worker_id or sequence is out of range
        ValueError: If the scheme is unknown
    """
    # Imported here: the generators themselves depend on the kernel package
    from sortable_ids.snowflake.generator import Snowflake
    from sortable_ids.uuid7.generator import UUIDv7

    scheme = Scheme(scheme)
    if scheme is Scheme.SNOWFLAKE:
        return Snowflake(worker_id, sequence, clock=clock)
    return UUIDv7(worker_id, sequence, clock=clock)


_default_factory: IdFactory | None = None
_default_lock = threading.Lock()


def default_id_factory() -> IdFactory:
    """Process-wide UUIDv7 generator, created on first use"""
    global _default_factory
    with _default_lock:
        if _default_factory is None:
            _default_factory = create_factory(Scheme.UUID7)
        return _default_factory


def generate_id() -> str:
    """
    Generate a UUIDv7 from the process-wide default generator

    Returns:
        Sortable UUID string (e.g., "018f8f5e-4a6b-7000-9c3d-5e6f7a8b9c0d")
    """
    return default_id_factory().generate()
