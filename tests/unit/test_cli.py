"""Tests for the mpf command line entry point."""

from __future__ import annotations

import json
import logging
from unittest.mock import patch

import pytest

from mpf import cli
from mpf.exceptions import ProcessEnumerationError
from mpf.process_models import ProcessRecord


@pytest.fixture(autouse=True)
def restore_root_logging():
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers = handlers
    root_logger.setLevel(level)


@pytest.fixture
def snapshot():
    return [
        ProcessRecord(pid=1, program="launchd", cmdline=["/sbin/launchd"]),
        ProcessRecord(pid=100, program="mongod", cmdline=["mongod", "--port", "27017"]),
        ProcessRecord(pid=101, program="mongod", cmdline=["mongod", "--port=20001", "--configsvr", "--replSet", "cfg"]),
        ProcessRecord(pid=200, program="mongos", cmdline=["mongos", "--port", "27017"]),
        ProcessRecord(pid=300, program="mongo", cmdline=["mongo"]),
    ]


def _run(argv, snapshot):
    with patch("mpf.cli.get_procs", return_value=snapshot) as get_procs:
        code = cli.main(argv)
    return code, get_procs


class TestMain:
    """Tests for main function."""

    def test_summary_without_filters(self, snapshot, capsys) -> None:
        """No filter prints the JSON summary."""
        code, _ = _run([], snapshot)

        assert code == 0
        summary = json.loads(capsys.readouterr().out)
        assert [d["pid"] for d in summary["mongod"]] == [100, 101]
        assert summary["mongod"][1]["server_type"] == "Config"
        assert summary["mongos"] == [{"pid": 200, "port": 27017}]
        assert summary["shell"] == [300]

    def test_port_filter_lists_server_then_router(self, snapshot, capsys) -> None:
        """--port prints matching mongod and mongos pids."""
        code, _ = _run(["--port", "27017"], snapshot)

        assert code == 0
        assert capsys.readouterr().out == "100\n200\n"

    def test_server_type_filter(self, snapshot, capsys) -> None:
        """--server-type prints matching mongod pids."""
        code, _ = _run(["--server-type", "config"], snapshot)

        assert code == 0
        assert capsys.readouterr().out == "101\n"

    def test_process_type_filter(self, snapshot, capsys) -> None:
        """-t selects a whole role."""
        code, _ = _run(["-t", "legacyshell"], snapshot)

        assert code == 0
        assert capsys.readouterr().out == "300\n"

    def test_filter_with_no_matches_prints_nothing(self, snapshot, capsys) -> None:
        """An empty match prints no lines rather than the summary."""
        code, _ = _run(["--server-type", "shard"], snapshot)

        assert code == 0
        assert capsys.readouterr().out == ""

    def test_shell_with_port_exits_before_enumeration(self, snapshot, capsys) -> None:
        """The shell/port conflict is reported with exit code 1."""
        code, get_procs = _run(["-t", "legacyshell", "-p", "20000"], snapshot)

        assert code == 1
        get_procs.assert_not_called()
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Cannot use port with legacy shell" in captured.err

    def test_shell_with_port_wins_over_invalid_environment(self, snapshot, capsys, monkeypatch) -> None:
        """The option conflict is reported before configuration is read."""
        monkeypatch.setenv("MPF_DEFAULT_PORT", "not-a-port")

        code, get_procs = _run(["-t", "legacyshell", "-p", "20000"], snapshot)

        assert code == 1
        get_procs.assert_not_called()
        assert "Cannot use port with legacy shell" in capsys.readouterr().err

    def test_bad_port_on_command_line_is_fatal(self, capsys) -> None:
        """A malformed --port on a mongod aborts with a non-zero status."""
        snapshot = [ProcessRecord(pid=5, program="mongod", cmdline=["mongod", "--port", "oops"])]

        code, _ = _run([], snapshot)

        assert code == 2
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Bad port number" in captured.err

    def test_enumeration_failure_is_fatal(self, capsys) -> None:
        """A process table that cannot be read aborts the run."""
        with patch("mpf.cli.get_procs", side_effect=ProcessEnumerationError("no proc")):
            code = cli.main(["-t", "mongod"])

        assert code == 2
        assert "no proc" in capsys.readouterr().err

    def test_verbose_writes_diagnostics_to_stderr(self, snapshot, capsys) -> None:
        """Verbose output never reaches stdout."""
        code, _ = _run(["-v", "-t", "mongos"], snapshot)

        assert code == 0
        captured = capsys.readouterr()
        assert captured.out == "200\n"
        assert "Shell: 300" in captured.err
        assert "200 - mongos - mongos" in captured.err

    def test_verbose_from_environment(self, snapshot, capsys, monkeypatch) -> None:
        """MPF_VERBOSE enables diagnostics without -v."""
        monkeypatch.setenv("MPF_VERBOSE", "yes")

        code, _ = _run(["-t", "mongos"], snapshot)

        assert code == 0
        assert "Shell: 300" in capsys.readouterr().err

    def test_invalid_environment_is_fatal(self, snapshot, capsys, monkeypatch) -> None:
        """Malformed configuration is reported, not raised."""
        monkeypatch.setenv("MPF_DEFAULT_PORT", "not-a-port")

        code, get_procs = _run([], snapshot)

        assert code == 2
        get_procs.assert_not_called()
        assert "MPF_DEFAULT_PORT" in capsys.readouterr().err


class TestBuildParser:
    """Tests for argument parsing."""

    def test_rejects_unknown_process_type(self, capsys) -> None:
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["-t", "mongoq"])

    def test_rejects_non_integer_port(self, capsys) -> None:
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["--port", "abc"])

    def test_criteria_from_args(self) -> None:
        args = cli.build_parser().parse_args(["--server-type", "replica-set", "-t", "mongod", "-p", "20000"])

        criteria = cli.criteria_from_args(args)

        assert criteria.server_type.value == "ReplicaSet"
        assert criteria.process_type.value == "mongod"
        assert criteria.port == 20000
