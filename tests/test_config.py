"""Tests for environment-driven configuration."""

import logging

import pytest

from unique_id_generator import config, SnowflakeIDGenerator, ConfigurationError


def test_defaults_from_empty_environment():
    settings = config.load_generator_settings({})
    assert settings == {
        "epoch": config.DEFAULT_EPOCH,
        "partition_id": 0,
        "node_id": 0,
        "timestamp_bits": 41,
        "partition_bits": 5,
        "node_bits": 5,
        "sequence_bits": 12,
    }


def test_environment_overrides():
    settings = config.load_generator_settings({
        "SNOWFLAKE_PARTITION_ID": "4",
        "SNOWFLAKE_NODE_ID": " 9 ",
        "SNOWFLAKE_EPOCH": "0",
        "SNOWFLAKE_SEQUENCE_BITS": "",
    })
    assert settings["partition_id"] == 4
    assert settings["node_id"] == 9
    assert settings["epoch"] == 0
    assert settings["sequence_bits"] == 12


def test_non_integer_setting():
    with pytest.raises(ConfigurationError, match="SNOWFLAKE_NODE_ID"):
        config.load_generator_settings({"SNOWFLAKE_NODE_ID": "seven"})


def test_from_config(monkeypatch):
    settings = config.load_generator_settings({"SNOWFLAKE_PARTITION_ID": "5", "SNOWFLAKE_NODE_ID": "6"})
    monkeypatch.setattr(config, "GENERATOR", settings)

    generator = SnowflakeIDGenerator.from_config()
    assert (generator.partition_id, generator.node_id) == (5, 6)

    generator = SnowflakeIDGenerator.from_config(node_id=7, partition_id=None)
    assert (generator.partition_id, generator.node_id) == (5, 7)


def test_from_config_validates(monkeypatch):
    monkeypatch.setattr(config, "GENERATOR", config.load_generator_settings({"SNOWFLAKE_NODE_ID": "99"}))
    with pytest.raises(ConfigurationError):
        SnowflakeIDGenerator.from_config()


def test_configure_logging(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    config.configure_logging("debug")
    assert calls == [{"level": "DEBUG", "format": config.LOGGING["format"]}]


def test_defaults_follow_generator_constants():
    assert config.DEFAULT_EPOCH == SnowflakeIDGenerator.EPOCH
    settings = config.load_generator_settings({})
    assert settings["timestamp_bits"] == SnowflakeIDGenerator.TIMESTAMP_BITS
    assert settings["sequence_bits"] == SnowflakeIDGenerator.SEQUENCE_BITS
