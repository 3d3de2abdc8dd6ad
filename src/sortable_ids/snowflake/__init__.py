"""
Snowflake - 64-bit identifiers: 41-bit timestamp, 10-bit worker ID, 12-bit sequence
"""

from sortable_ids.snowflake.generator import Snowflake
from sortable_ids.snowflake.models import SnowflakeFields

__all__ = ["Snowflake", "SnowflakeFields"]
