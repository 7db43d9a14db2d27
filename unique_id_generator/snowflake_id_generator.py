import time
import logging
import threading
from collections import namedtuple

from .exceptions import ConfigurationError, ClockRegressionError, TimestampOverflowError

logger = logging.getLogger(__name__)

# Raw fields of an ID; timestamp is milliseconds since the generator's epoch
DecodedId = namedtuple("DecodedId", ["timestamp", "partition_id", "node_id", "sequence"])

ID_BITS = 64


def current_millis():
    """Get the current wall-clock time in milliseconds"""
    return int(time.time() * 1000)


def _mask(bits):
    return -1 ^ (-1 << bits)


def _check_int(name, value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")


class SnowflakeIDGenerator:
    """Twitter Snowflake ID Generator

    64-bit ID broken down into (default layout):
    - 1 bit: sign bit, always 0
    - 41 bits: timestamp (milliseconds since epoch)
    - 5 bits: partition ID (e.g. datacenter)
    - 5 bits: node ID (e.g. machine)
    - 12 bits: sequence number

    next_id() is safe to call from many threads; every call runs under
    the instance lock.
    """

    # 2024-01-01 00:00:00 UTC
    EPOCH = 1704067200000

    # Default bit lengths for each section
    TIMESTAMP_BITS = 41
    PARTITION_ID_BITS = 5
    NODE_ID_BITS = 5
    SEQUENCE_BITS = 12

    def __init__(self, partition_id, node_id, epoch=None,
                 partition_bits=PARTITION_ID_BITS, node_bits=NODE_ID_BITS,
                 sequence_bits=SEQUENCE_BITS, timestamp_bits=TIMESTAMP_BITS,
                 clock=None):
        """Initialize the ID generator with its identity and bit layout

        Args:
            partition_id (int): ID of the partition (0 to 2^partition_bits - 1)
            node_id (int): ID of the node within the partition (0 to 2^node_bits - 1)
            epoch (int, optional): Custom epoch in milliseconds
            partition_bits (int): Width of the partition ID field
            node_bits (int): Width of the node ID field
            sequence_bits (int): Width of the sequence field
            timestamp_bits (int): Width of the timestamp field
            clock (callable, optional): Returns wall-clock milliseconds

        Raises:
            ConfigurationError: If the identity or the layout is invalid
        """
        if epoch is None:
            epoch = self.EPOCH

        widths = {
            "timestamp_bits": timestamp_bits,
            "partition_bits": partition_bits,
            "node_bits": node_bits,
            "sequence_bits": sequence_bits,
        }
        for name, width in widths.items():
            _check_int(name, width)
            if width < 0:
                raise ConfigurationError(f"{name} must not be negative, got {width}")
        if timestamp_bits == 0:
            raise ConfigurationError("timestamp_bits must be at least 1")
        if sum(widths.values()) != ID_BITS - 1:
            raise ConfigurationError(
                f"Field widths must sum to {ID_BITS - 1}, got {sum(widths.values())}"
            )

        _check_int("epoch", epoch)
        if epoch < 0:
            raise ConfigurationError(f"Epoch must not be negative, got {epoch}")

        self.timestamp_bits = timestamp_bits
        self.partition_bits = partition_bits
        self.node_bits = node_bits
        self.sequence_bits = sequence_bits

        # Maximum values for each section
        self.max_timestamp = _mask(timestamp_bits)
        self.max_partition_id = _mask(partition_bits)
        self.max_node_id = _mask(node_bits)
        self.max_sequence = _mask(sequence_bits)

        # Bit shifts for each section
        self.node_id_shift = sequence_bits
        self.partition_id_shift = sequence_bits + node_bits
        self.timestamp_shift = sequence_bits + node_bits + partition_bits

        _check_int("partition_id", partition_id)
        _check_int("node_id", node_id)
        if partition_id < 0 or partition_id > self.max_partition_id:
            raise ConfigurationError(
                f"Partition ID must be between 0 and {self.max_partition_id}, got {partition_id}"
            )
        if node_id < 0 or node_id > self.max_node_id:
            raise ConfigurationError(
                f"Node ID must be between 0 and {self.max_node_id}, got {node_id}"
            )

        self.epoch = epoch
        self.partition_id = partition_id
        self.node_id = node_id
        self._clock = clock or current_millis

        self.sequence = 0
        self.last_timestamp = -1
        self.lock = threading.Lock()

        logger.info(f"Initialized ID generator with partition ID {partition_id}, node ID {node_id}")

    @classmethod
    def from_config(cls, **overrides):
        """Build a generator from the environment-driven settings

        Args:
            **overrides: Values replacing the configured ones

        Returns:
            SnowflakeIDGenerator: A configured generator
        """
        from . import config

        settings = dict(config.GENERATOR)
        settings.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**settings)

    def _wait_next_millis(self, last_timestamp):
        """Wait until the clock moves past last_timestamp

        Args:
            last_timestamp (int): The last timestamp used

        Returns:
            int: The next timestamp in milliseconds
        """
        timestamp = self._clock()
        while timestamp <= last_timestamp:
            timestamp = self._clock()
        return timestamp

    def next_id(self):
        """Generate the next unique ID

        Returns:
            int: A 64-bit unique ID

        Raises:
            ClockRegressionError: If the clock is behind the last used timestamp
            TimestampOverflowError: If the time since epoch no longer fits the timestamp field
        """
        with self.lock:
            timestamp = self._clock()

            if timestamp < self.last_timestamp:
                error = ClockRegressionError(self.last_timestamp, timestamp)
                logger.error(str(error))
                raise error

            if timestamp < self.epoch:
                logger.error(f"Clock reads {timestamp}, which is before the epoch {self.epoch}")
                raise ClockRegressionError(
                    self.epoch, timestamp,
                    f"Clock reads {timestamp}, which is before the epoch {self.epoch}",
                )

            if timestamp == self.last_timestamp:
                sequence = (self.sequence + 1) & self.max_sequence

                # Sequence exhausted for this millisecond
                if sequence == 0:
                    logger.debug(f"Sequence exhausted at {timestamp}, waiting for next millisecond")
                    timestamp = self._wait_next_millis(self.last_timestamp)
            else:
                sequence = 0

            # The timestamp field would wrap and repeat earlier IDs
            if timestamp - self.epoch > self.max_timestamp:
                error = TimestampOverflowError(timestamp - self.epoch, self.max_timestamp)
                logger.error(str(error))
                raise error

            self.sequence = sequence
            self.last_timestamp = timestamp

            return self.encode(timestamp - self.epoch, self.partition_id, self.node_id, sequence)

    def encode(self, timestamp, partition_id, node_id, sequence):
        """Pack field values into an ID using this generator's layout

        Args:
            timestamp (int): Milliseconds since the epoch
            partition_id (int): Partition ID
            node_id (int): Node ID
            sequence (int): Sequence number

        Returns:
            int: The packed ID
        """
        return (
            ((timestamp & self.max_timestamp) << self.timestamp_shift) |
            ((partition_id & self.max_partition_id) << self.partition_id_shift) |
            ((node_id & self.max_node_id) << self.node_id_shift) |
            (sequence & self.max_sequence)
        )

    def decode(self, snowflake_id):
        """Unpack an ID into its raw fields

        Args:
            snowflake_id (int): The ID to decode

        Returns:
            DecodedId: timestamp delta, partition ID, node ID and sequence
        """
        if snowflake_id < 0 or snowflake_id >> ID_BITS:
            raise ValueError(f"Not a 64-bit unsigned ID: {snowflake_id}")

        return DecodedId(
            timestamp=(snowflake_id >> self.timestamp_shift) & self.max_timestamp,
            partition_id=(snowflake_id >> self.partition_id_shift) & self.max_partition_id,
            node_id=(snowflake_id >> self.node_id_shift) & self.max_node_id,
            sequence=snowflake_id & self.max_sequence,
        )

    def timestamp_millis(self, snowflake_id):
        """Wall-clock milliseconds at which an ID was generated"""
        return self.decode(snowflake_id).timestamp + self.epoch

    def __repr__(self):
        return (
            f"{type(self).__name__}(partition_id={self.partition_id}, "
            f"node_id={self.node_id}, epoch={self.epoch})"
        )
