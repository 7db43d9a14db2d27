import time
import random
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from collections import Counter

from tabulate import tabulate

from .snowflake_id_generator import SnowflakeIDGenerator

logger = logging.getLogger(__name__)


class DistributedSystemSimulator:
    """Simulates a distributed system with multiple partitions and nodes."""

    def __init__(self, num_partitions=2, num_nodes_per_partition=3, jitter_ms=0, **generator_kwargs):
        """Initialize the simulator with the specified number of partitions and nodes.

        Args:
            num_partitions (int): Number of partitions (datacenters) to simulate
            num_nodes_per_partition (int): Number of nodes (machines) per partition
            jitter_ms (int): Upper bound of a random delay before each ID, in ms
            **generator_kwargs: Extra arguments for every SnowflakeIDGenerator
        """
        self.num_partitions = num_partitions
        self.num_nodes_per_partition = num_nodes_per_partition
        self.jitter_ms = jitter_ms
        self.generator_kwargs = generator_kwargs
        self.generators = {}
        self.generated_ids = []
        self.id_lock = threading.Lock()

        for partition_id in range(num_partitions):
            for node_id in range(num_nodes_per_partition):
                key = (partition_id, node_id)
                self.generators[key] = SnowflakeIDGenerator(partition_id, node_id, **generator_kwargs)

    def generate_id(self, partition_id, node_id):
        """Generate a unique ID from a specific partition and node.

        Args:
            partition_id (int): Partition ID
            node_id (int): Node ID

        Returns:
            int: A unique ID
        """
        generator = self.generators.get((partition_id, node_id))
        if not generator:
            raise ValueError(f"No generator found for partition {partition_id}, node {node_id}")

        if self.jitter_ms:
            time.sleep(random.randint(0, self.jitter_ms) / 1000)

        snowflake_id = generator.next_id()
        self._record(generator, snowflake_id)
        return snowflake_id

    def _record(self, generator, snowflake_id):
        decoded = generator.decode(snowflake_id)
        with self.id_lock:
            self.generated_ids.append((snowflake_id, decoded))

    def _worker(self, work_item):
        partition_id, node_id, count = work_item
        return [self.generate_id(partition_id, node_id) for _ in range(count)]

    def simulate_load(self, ids_per_node=100, max_workers=None):
        """Generate IDs from every node concurrently, one worker per node.

        Args:
            ids_per_node (int): Number of IDs to generate per node
            max_workers (int, optional): Maximum number of worker threads

        Returns:
            list: All IDs generated by this run
        """
        work_items = [
            (partition_id, node_id, ids_per_node)
            for partition_id, node_id in self.generators
        ]
        logger.info(f"Simulating {ids_per_node} IDs on each of {len(work_items)} nodes")

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            all_ids = list(executor.map(self._worker, work_items))

        return [id_val for sublist in all_ids for id_val in sublist]

    def simulate_contention(self, num_threads=8, ids_per_thread=1000, partition_id=0, node_id=0):
        """Hammer a single shared generator from many threads.

        Args:
            num_threads (int): Number of concurrent callers
            ids_per_thread (int): IDs generated by each caller
            partition_id (int): Partition of the shared generator
            node_id (int): Node of the shared generator

        Returns:
            list: All IDs generated by this run
        """
        logger.info(
            f"Simulating {num_threads} threads sharing partition {partition_id}, node {node_id}"
        )
        work_items = [(partition_id, node_id, ids_per_thread)] * num_threads
        with ThreadPoolExecutor(max_workers=num_threads) as executor:
            all_ids = list(executor.map(self._worker, work_items))

        return [id_val for sublist in all_ids for id_val in sublist]

    def summary(self):
        """Summarize everything generated so far.

        Returns:
            dict: Totals, duplicates and distributions per node and sequence
        """
        with self.id_lock:
            records = list(self.generated_ids)

        id_counts = Counter(snowflake_id for snowflake_id, _ in records)
        return {
            "total": len(records),
            "unique": len(id_counts),
            "duplicates": sum(count - 1 for count in id_counts.values()),
            "by_node": Counter((d.partition_id, d.node_id) for _, d in records),
            "by_timestamp": Counter(d.timestamp for _, d in records),
            "by_sequence": Counter(d.sequence for _, d in records),
        }

    def display_results(self, limit=10):
        """Print a sample of the generated IDs and the distributions.

        Args:
            limit (int): Maximum number of IDs to display
        """
        with self.id_lock:
            sample = sorted(self.generated_ids)[:limit]
        stats = self.summary()

        headers = ["ID", "Timestamp", "Partition", "Node", "Sequence"]
        table_data = [
            [snowflake_id, d.timestamp, d.partition_id, d.node_id, d.sequence]
            for snowflake_id, d in sample
        ]
        print("\n=== Sample Generated IDs ===")
        print(tabulate(table_data, headers=headers, tablefmt="grid"))

        print("\n=== Statistics ===")
        print(f"Total IDs generated: {stats['total']}")
        print(f"Unique IDs: {stats['unique']}")
        print(f"Duplicate IDs: {stats['duplicates']}")
        if stats["duplicates"]:
            print(f"WARNING: {stats['duplicates']} duplicate IDs found!")
        else:
            print("SUCCESS: All IDs are unique!")

        print("\n=== Busiest Milliseconds ===")
        print(tabulate(stats["by_timestamp"].most_common(5), headers=["Timestamp", "Count"], tablefmt="grid"))

        print("\n=== Distribution by Partition and Node ===")
        node_table = [
            [partition_id, node_id, count]
            for (partition_id, node_id), count in sorted(stats["by_node"].items())
        ]
        print(tabulate(node_table, headers=["Partition", "Node", "Count"], tablefmt="grid"))

        print("\n=== Sequence Number Distribution ===")
        seq_table = sorted(stats["by_sequence"].items())[:10]
        print(tabulate(seq_table, headers=["Sequence", "Count"], tablefmt="grid"))
