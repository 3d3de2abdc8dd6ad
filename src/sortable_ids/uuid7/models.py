"""
UUIDv7 data models - decoded identifier fields
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field

from sortable_ids.kernel.time import ms_to_datetime


class UUIDv7Fields(BaseModel):
    """
    Fields extracted from a 128-bit UUIDv7

    binary holds the (left, right) 64-bit halves. rand_a carries the
    per-millisecond sequence, rand_b the 62 random bits.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: int = Field(ge=0, description="Unix time in milliseconds")
    version: int = Field(ge=0, le=15)
    variant: int = Field(ge=0, le=3)
    rand_a: int = Field(ge=0, le=0xFFF)
    rand_b: int = Field(ge=0, le=(1 << 62) - 1)
    binary: tuple[int, int]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def date(self) -> datetime | None:
        """Timestamp as an aware UTC datetime, None past year 9999"""
        return ms_to_datetime(self.timestamp)

    @property
    def sequence(self) -> int:
        return self.rand_a

    def as_uuid(self) -> uuid.UUID:
        """Standard library UUID for the same 128 bits"""
        left, right = self.binary
        return uuid.UUID(int=(left << 64) | right)
