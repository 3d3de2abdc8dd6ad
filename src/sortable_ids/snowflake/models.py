"""
Snowflake data models - decoded identifier fields
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field

from sortable_ids.kernel.time import ms_to_datetime


class SnowflakeFields(BaseModel):
    """
    Fields extracted from a 64-bit Snowflake identifier

    timestamp is absolute Unix milliseconds (the epoch already added back).
    binary is the zero-padded 64-character bit string.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: int = Field(description="Unix time in milliseconds")
    worker_id: int = Field(ge=0, le=1023)
    sequence: int = Field(ge=0, le=4095)
    binary: str = Field(min_length=64, max_length=64, pattern=r"^[01]{64}$")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def date(self) -> datetime | None:
        """Timestamp as an aware UTC datetime, None past year 9999"""
        return ms_to_datetime(self.timestamp)
