"""
Random bit sources for the UUIDv7 rand_b field

The rand_b field is the only thing standing between a known identifier
and a guessable successor, so production code draws it from the
operating system CSPRNG via the secrets module.
"""

import secrets
from collections.abc import Iterable
from itertools import cycle
from typing import Protocol

U64_MASK = (1 << 64) - 1


class RandomSource(Protocol):
    """Protocol for sources of unbiased random bits"""

    def next_u64(self) -> int:
        """Return 64 random bits as a non-negative integer"""
        ...


class SystemRandomSource:
    """Cryptographically strong random source backed by secrets.randbits"""

    def next_u64(self) -> int:
        return secrets.randbits(64)


class StaticRandomSource:
    """
    Replays a fixed cycle of values

    Only meant for tests that need reproducible rand_b fields.
    """

    def __init__(self, values: Iterable[int] = (0,)) -> None:
        values = [value & U64_MASK for value in values]
        if not values:
            raise ValueError("StaticRandomSource needs at least one value")
        self._values = cycle(values)

    def next_u64(self) -> int:
        return next(self._values)


# Global default random source
default_random_source: RandomSource = SystemRandomSource()
