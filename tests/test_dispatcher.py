import subprocess
from unittest import mock

import pytest

from raypm.backends import Winget
from raypm.dispatcher import DispatchPlan, execute, resolve
from raypm.errors import (
    CommandNotFoundError,
    ExecutionFailedError,
    InvalidArgumentsError,
    ProcessIOError,
    UsageError,
)


def completed(code):
    return subprocess.CompletedProcess(args=[], returncode=code)


@pytest.fixture
def winget():
    return Winget()


@pytest.mark.parametrize(
    "args, expected",
    [
        (["-Syu"], [("upgrade", "--all")]),
        (["-Syyu"], [("source", "update"), ("upgrade", "--all")]),
        (["-Sy"], [("source", "update")]),
        (["-S", "vim"], [("install", "vim")]),
        (["-Ss", "vim"], [("search", "vim")]),
        (["-R", "vim"], [("uninstall", "vim")]),
        (["-Rns", "vim"], [("uninstall", "vim")]),
        (["-Q"], [("list",)]),
        (["-Qi", "vim"], [("show", "vim")]),
        (["-Si", "vim"], [("show", "vim")]),
        (["-Qs"], [("list",)]),
    ],
)
def test_resolve_table(winget, args, expected):
    plan = resolve(args, winget)
    assert plan.executable == "winget"
    assert list(plan.invocations) == expected
    assert not plan.passthrough


def test_resolve_appends_all_trailing_args(winget):
    plan = resolve(["-S", "Git.Git", "--silent"], winget)
    assert plan.command_lines() == [["winget", "install", "Git.Git", "--silent"]]


def test_resolve_passthrough_keeps_order(winget):
    plan = resolve(["upgrade", "--id", "Git.Git", "-e"], winget)
    assert plan.passthrough
    assert plan.command_lines() == [["winget", "upgrade", "--id", "Git.Git", "-e"]]


def test_resolve_empty_raises_usage(winget):
    with pytest.raises(UsageError) as exc:
        resolve([], winget)
    assert str(exc.value) == "Usage: ray [options] [package]"


@mock.patch("raypm.dispatcher.subprocess.run")
@pytest.mark.parametrize("flag", ["-S", "-Ss", "-R", "-Rns", "-Qi", "-Si"])
def test_resolve_missing_trailing_arg(mock_run, winget, flag):
    with pytest.raises(InvalidArgumentsError) as exc:
        resolve([flag], winget)
    assert str(exc.value).startswith("Invalid arguments: The command '")
    assert exc.value.exit_code == 1
    mock_run.assert_not_called()


def test_resolve_chain_ignores_trailing_args(winget, caplog):
    plan = resolve(["-Syyu", "extra"], winget)
    assert list(plan.invocations) == [("source", "update"), ("upgrade", "--all")]
    assert "Ignoring extra arguments" in caplog.text


def test_execute_runs_chain_in_order(winget, capsys):
    runner = mock.Mock(return_value=completed(0))
    code = execute(resolve(["-Syyu"], winget), runner=runner)
    assert code == 0
    assert runner.call_args_list == [
        mock.call(["winget", "source", "update"]),
        mock.call(["winget", "upgrade", "--all"]),
    ]
    out = capsys.readouterr().out
    assert "Running: winget source update" in out
    assert "Running: winget upgrade --all" in out


def test_execute_stops_chain_on_failure(winget):
    runner = mock.Mock(side_effect=[completed(3), completed(0)])
    with pytest.raises(ExecutionFailedError) as exc:
        execute(resolve(["-Syyu"], winget), runner=runner)
    assert runner.call_count == 1
    assert exc.value.exit_code == 3


def test_execute_propagates_exit_code(winget):
    runner = mock.Mock(return_value=completed(7))
    with pytest.raises(ExecutionFailedError) as exc:
        execute(resolve(["-S", "vim"], winget), runner=runner)
    assert exc.value.exit_code == 7
    assert str(exc.value) == "Execution failed: Command failed with exit code: 7"


def test_execute_signal_exit_maps_to_one():
    runner = mock.Mock(return_value=completed(-9))
    with pytest.raises(ExecutionFailedError) as exc:
        execute(DispatchPlan("winget", (("list",),)), runner=runner)
    assert exc.value.return_code == -9
    assert exc.value.exit_code == 1


def test_execute_missing_executable():
    runner = mock.Mock(side_effect=FileNotFoundError(2, "No such file"))
    with pytest.raises(CommandNotFoundError) as exc:
        execute(DispatchPlan("winget", (("list",),)), runner=runner)
    assert str(exc.value) == "Command not found: winget"


def test_execute_spawn_io_error():
    runner = mock.Mock(side_effect=PermissionError(13, "Permission denied"))
    with pytest.raises(ProcessIOError) as exc:
        execute(DispatchPlan("winget", (("list",),)), runner=runner)
    assert str(exc.value).startswith("IO error: ")


def test_execute_without_echo(capsys):
    runner = mock.Mock(return_value=completed(0))
    execute(DispatchPlan("winget", (("list",),)), runner=runner, echo=False)
    assert capsys.readouterr().out == ""


@mock.patch("raypm.dispatcher.subprocess.run")
def test_execute_defaults_to_subprocess_run(mock_run):
    mock_run.return_value = completed(0)
    assert execute(DispatchPlan("winget", (("list",),)), echo=False) == 0
    mock_run.assert_called_once_with(["winget", "list"])
