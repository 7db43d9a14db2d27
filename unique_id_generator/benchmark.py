"""
Batch generation benchmark for the ID generator.
"""

import time
import logging
from collections import namedtuple

from . import config
from .snowflake_id_generator import SnowflakeIDGenerator

logger = logging.getLogger(__name__)

BenchmarkResult = namedtuple("BenchmarkResult", ["count", "unique", "elapsed", "rate"])


def run_benchmark(count=None, generator=None):
    """Generate a batch of IDs and time it.

    Args:
        count (int, optional): Number of IDs to generate
        generator (SnowflakeIDGenerator, optional): Generator to use

    Returns:
        BenchmarkResult: Counts, elapsed seconds and IDs per second
    """
    if count is None:
        count = config.BENCHMARK["count"]
    if generator is None:
        generator = SnowflakeIDGenerator.from_config(
            partition_id=config.BENCHMARK["partition_id"],
            node_id=config.BENCHMARK["node_id"],
        )

    logger.info(f"Generating {count} IDs with {generator!r}")

    start = time.perf_counter()
    ids = [generator.next_id() for _ in range(count)]
    elapsed = time.perf_counter() - start

    rate = count / elapsed if elapsed > 0 else float("inf")
    result = BenchmarkResult(count=count, unique=len(set(ids)), elapsed=elapsed, rate=rate)

    if result.unique != count:
        logger.warning(f"{count - result.unique} duplicate IDs generated")
    logger.info(f"Generated {count} IDs in {elapsed:.3f} seconds ({rate:.0f} IDs/sec)")
    return result
