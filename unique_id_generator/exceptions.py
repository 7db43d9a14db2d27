"""
Exceptions raised by the Snowflake ID generator.
"""


class IDGeneratorError(Exception):
    """Base class for all ID generator errors."""


class ConfigurationError(IDGeneratorError, ValueError):
    """Raised when a generator is built with invalid identity or layout settings."""


class ClockRegressionError(IDGeneratorError, RuntimeError):
    """Raised when the system clock reports a time before the last one used.

    Args:
        last_timestamp (int): Last millisecond timestamp used to emit an ID
        current_timestamp (int): The timestamp the clock reported
    """

    def __init__(self, last_timestamp, current_timestamp, message=None):
        self.last_timestamp = last_timestamp
        self.current_timestamp = current_timestamp
        self.drift_ms = last_timestamp - current_timestamp
        if message is None:
            message = (
                f"Clock moved backwards. Refusing to generate ID for "
                f"{self.drift_ms} milliseconds"
            )
        super().__init__(message)


class TimestampOverflowError(IDGeneratorError, OverflowError):
    """Raised when the time since epoch no longer fits the timestamp field.

    Args:
        delta (int): Milliseconds since the epoch
        max_timestamp (int): Largest value the timestamp field can hold
    """

    def __init__(self, delta, max_timestamp):
        self.delta = delta
        self.max_timestamp = max_timestamp
        super().__init__(
            f"Timestamp {delta} ms since epoch exceeds the field maximum {max_timestamp}. "
            f"Refusing to generate ID"
        )
