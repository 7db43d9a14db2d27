"""Tests for the command line entry point."""

from unique_id_generator import SnowflakeIDGenerator, cli, config


def test_no_command_prints_help(capsys):
    assert cli.main([]) == 0
    assert "usage" in capsys.readouterr().out


def test_generate(capsys):
    assert cli.main(["generate", "-n", "3", "--partition-id", "4", "--node-id", "5"]) == 0
    ids = [int(line) for line in capsys.readouterr().out.split()]
    assert len(set(ids)) == 3

    decoder = SnowflakeIDGenerator(0, 0)
    for snowflake_id in ids:
        decoded = decoder.decode(snowflake_id)
        assert (decoded.partition_id, decoded.node_id) == (4, 5)


def test_generate_invalid_identity(capsys):
    assert cli.main(["generate", "--node-id", "32"]) == 1


def test_benchmark(capsys):
    assert cli.main(["benchmark", "-n", "1000"]) == 0
    assert "Generated 1000 IDs (1000 unique)" in capsys.readouterr().out


def test_simulate(capsys):
    assert cli.main(["simulate", "--partitions", "1", "--nodes", "2", "--ids-per-node", "5"]) == 0
    assert "Total IDs generated: 10" in capsys.readouterr().out


def test_benchmark_default_count():
    args = cli.build_parser().parse_args(["benchmark"])
    assert args.count == config.BENCHMARK["count"]
