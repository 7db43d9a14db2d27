"""
Configuration settings for the Snowflake ID generator.

Values are read from environment variables. A local .env file is loaded
first, so an instance's identity can be assigned per machine without
touching the code.
"""

import os
import logging

from dotenv import load_dotenv, find_dotenv

from .exceptions import ConfigurationError
from .snowflake_id_generator import SnowflakeIDGenerator

load_dotenv(find_dotenv(usecwd=True))

DEFAULT_EPOCH = SnowflakeIDGenerator.EPOCH

# Environment variable name -> (settings key, default)
_GENERATOR_ENV = {
    "SNOWFLAKE_EPOCH": ("epoch", DEFAULT_EPOCH),
    "SNOWFLAKE_PARTITION_ID": ("partition_id", 0),
    "SNOWFLAKE_NODE_ID": ("node_id", 0),
    "SNOWFLAKE_TIMESTAMP_BITS": ("timestamp_bits", SnowflakeIDGenerator.TIMESTAMP_BITS),
    "SNOWFLAKE_PARTITION_BITS": ("partition_bits", SnowflakeIDGenerator.PARTITION_ID_BITS),
    "SNOWFLAKE_NODE_BITS": ("node_bits", SnowflakeIDGenerator.NODE_ID_BITS),
    "SNOWFLAKE_SEQUENCE_BITS": ("sequence_bits", SnowflakeIDGenerator.SEQUENCE_BITS),
}


def _int_setting(environ, name, default):
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


def load_generator_settings(environ=None):
    """Read the generator settings from the environment.

    Args:
        environ (Mapping, optional): Variables to read from, defaults to os.environ

    Returns:
        dict: Keyword arguments for SnowflakeIDGenerator
    """
    if environ is None:
        environ = os.environ
    return {
        key: _int_setting(environ, name, default)
        for name, (key, default) in _GENERATOR_ENV.items()
    }


# Generator settings
GENERATOR = load_generator_settings()

# Logging configuration
LOGGING = {
    "level": os.getenv("LOG_LEVEL", "INFO"),
    "format": "%(asctime)s [%(name)s] %(levelname)s: %(message)s",
}

# Benchmark settings (mirrors the classic 65536 id batch)
BENCHMARK = {
    "count": _int_setting(os.environ, "BENCHMARK_COUNT", 1 << 16),
    "partition_id": 2,
    "node_id": 3,
}

# Simulator settings
SIMULATOR = {
    "num_partitions": 2,
    "num_nodes_per_partition": 3,
    "ids_per_node": 100,
}


def configure_logging(level=None):
    """Configure root logging for command line use.

    Args:
        level (str, optional): Log level name, defaults to LOGGING["level"]
    """
    logging.basicConfig(
        level=(level or LOGGING["level"]).upper(),
        format=LOGGING["format"],
    )
