#!/usr/bin/env python3
"""
Command line entry point for the Snowflake ID generator.
Generates IDs, runs the batch benchmark or the distributed system simulator.
"""

import sys
import argparse
import logging

from . import config
from .benchmark import run_benchmark
from .exceptions import IDGeneratorError
from .simulator import DistributedSystemSimulator
from .snowflake_id_generator import SnowflakeIDGenerator

logger = logging.getLogger(__name__)


def print_header(title):
    """Print a section header."""
    width = 80
    print("\n" + "=" * width)
    print(f"{title:^{width}}")
    print("=" * width + "\n")


def run_generate(args):
    generator = SnowflakeIDGenerator.from_config(partition_id=args.partition_id, node_id=args.node_id)
    for _ in range(args.count):
        print(generator.next_id())


def run_benchmark_command(args):
    print_header("BATCH GENERATION BENCHMARK")
    generator = SnowflakeIDGenerator.from_config(
        partition_id=args.partition_id if args.partition_id is not None else config.BENCHMARK["partition_id"],
        node_id=args.node_id if args.node_id is not None else config.BENCHMARK["node_id"],
    )
    result = run_benchmark(count=args.count, generator=generator)
    print(f"Generated {result.count} IDs ({result.unique} unique) in {result.elapsed * 1000:.1f} ms")
    print(f"Rate: {result.rate:.0f} IDs/sec")


def run_simulate(args):
    print_header("DISTRIBUTED SYSTEM SIMULATOR")
    simulator = DistributedSystemSimulator(
        num_partitions=args.partitions,
        num_nodes_per_partition=args.nodes,
    )
    print(f"Simulating {args.partitions} partitions with {args.nodes} nodes each")
    simulator.simulate_load(ids_per_node=args.ids_per_node)
    simulator.display_results(limit=args.limit)


def build_parser():
    parser = argparse.ArgumentParser(prog="snowflake-idgen", description="Snowflake ID Generator")
    parser.add_argument("--log-level", default=None, help="Log level (default: LOG_LEVEL or INFO)")

    identity = argparse.ArgumentParser(add_help=False)
    identity.add_argument("--partition-id", type=int, default=None, help="Override SNOWFLAKE_PARTITION_ID")
    identity.add_argument("--node-id", type=int, default=None, help="Override SNOWFLAKE_NODE_ID")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    gen_parser = subparsers.add_parser("generate", parents=[identity], help="Print new IDs")
    gen_parser.add_argument("-n", "--count", type=int, default=1, help="Number of IDs")
    gen_parser.set_defaults(func=run_generate)

    bench_parser = subparsers.add_parser("benchmark", parents=[identity], help="Time a batch of IDs")
    bench_parser.add_argument("-n", "--count", type=int, default=config.BENCHMARK["count"], help="Number of IDs")
    bench_parser.set_defaults(func=run_benchmark_command)

    sim_parser = subparsers.add_parser("simulate", help="Run distributed system simulator")
    sim_parser.add_argument("--partitions", type=int, default=config.SIMULATOR["num_partitions"])
    sim_parser.add_argument("--nodes", type=int, default=config.SIMULATOR["num_nodes_per_partition"])
    sim_parser.add_argument("--ids-per-node", type=int, default=config.SIMULATOR["ids_per_node"])
    sim_parser.add_argument("--limit", type=int, default=10, help="Sample IDs to display")
    sim_parser.set_defaults(func=run_simulate)

    return parser


def main(argv=None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    config.configure_logging(args.log_level)
    try:
        args.func(args)
    except IDGeneratorError as e:
        logger.error(f"{args.command} failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
