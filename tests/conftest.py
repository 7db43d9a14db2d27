"""Pytest fixtures for all tests."""

import pytest

from unique_id_generator import SnowflakeIDGenerator


class FakeClock:
    """Clock returning a fixed millisecond value until moved."""

    def __init__(self, now=1_760_000_000_000):
        self.now = now
        self.reads = 0

    def __call__(self):
        self.reads += 1
        return self.now

    def advance(self, millis=1):
        self.now += millis


class ScriptedClock:
    """Clock replaying a list of readings, then repeating the last one."""

    def __init__(self, readings):
        self.readings = list(readings)
        self.reads = 0

    def __call__(self):
        value = self.readings[min(self.reads, len(self.readings) - 1)]
        self.reads += 1
        return value


@pytest.fixture
def clock():
    """Create a fake clock."""
    return FakeClock()


@pytest.fixture
def generator(clock):
    """Create a generator driven by the fake clock."""
    return SnowflakeIDGenerator(partition_id=2, node_id=3, epoch=0, clock=clock)
