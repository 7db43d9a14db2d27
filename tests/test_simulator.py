"""Tests for the distributed system simulator and the benchmark."""

import pytest

from conftest import FakeClock
from unique_id_generator import SnowflakeIDGenerator
from unique_id_generator.benchmark import run_benchmark
from unique_id_generator.simulator import DistributedSystemSimulator


@pytest.fixture
def simulator():
    """Create a small simulator."""
    return DistributedSystemSimulator(num_partitions=2, num_nodes_per_partition=3)


def test_one_generator_per_node(simulator):
    assert sorted(simulator.generators) == [(p, n) for p in range(2) for n in range(3)]


def test_simulate_load_unique(simulator):
    ids = simulator.simulate_load(ids_per_node=500)
    assert len(ids) == 6 * 500
    assert len(set(ids)) == len(ids)

    stats = simulator.summary()
    assert stats["total"] == 3000
    assert stats["unique"] == 3000
    assert stats["duplicates"] == 0
    assert set(stats["by_node"].values()) == {500}


def test_simulate_contention_unique(simulator):
    ids = simulator.simulate_contention(num_threads=8, ids_per_thread=1000, partition_id=1, node_id=2)
    assert len(set(ids)) == 8000
    assert simulator.summary()["by_node"] == {(1, 2): 8000}


def test_unknown_node(simulator):
    with pytest.raises(ValueError):
        simulator.generate_id(5, 0)


def test_generator_kwargs_passed_through():
    clock = FakeClock()
    simulator = DistributedSystemSimulator(1, 2, epoch=0, clock=clock)
    ids = simulator.simulate_load(ids_per_node=3)
    stats = simulator.summary()
    assert len(set(ids)) == 6
    assert stats["by_timestamp"] == {clock.now: 6}
    assert stats["by_sequence"] == {0: 2, 1: 2, 2: 2}


def test_display_results(simulator, capsys):
    simulator.simulate_load(ids_per_node=10)
    simulator.display_results(limit=5)
    out = capsys.readouterr().out
    assert "Sample Generated IDs" in out
    assert "Total IDs generated: 60" in out
    assert "SUCCESS: All IDs are unique!" in out


def test_benchmark():
    generator = SnowflakeIDGenerator(2, 3)
    result = run_benchmark(count=10000, generator=generator)
    assert result.count == 10000
    assert result.unique == 10000
    assert result.elapsed >= 0
    assert result.rate > 0
