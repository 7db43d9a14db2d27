"""
Snowflake-style 64-bit unique ID generator.
"""

from .exceptions import (
    IDGeneratorError,
    ConfigurationError,
    ClockRegressionError,
    TimestampOverflowError,
)
from .snowflake_id_generator import SnowflakeIDGenerator, DecodedId

__all__ = [
    "SnowflakeIDGenerator",
    "DecodedId",
    "IDGeneratorError",
    "ConfigurationError",
    "ClockRegressionError",
    "TimestampOverflowError",
]
