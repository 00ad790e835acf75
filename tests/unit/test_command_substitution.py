"""Unit tests for `$(command)` substitution and the shell runner."""

from __future__ import annotations

import subprocess

import pytest

from envline.errors import SubstitutionError
from envline.parser.facade import Parser
from envline.substitutions import (
    CommandSubstitution,
    ShellCommandRunner,
    SubstitutionPipeline,
    VariableSubstitution,
)
from envline.substitutions import command as command_module


class _StubRunner:
    """Runner double mapping commands to output."""

    def __init__(self, outputs: dict[str, str]) -> None:
        self.outputs = outputs
        self.commands: list[str] = []

    def run(self, command: str) -> str:
        """Return canned output and remember the command."""

        self.commands.append(command)
        return self.outputs[command]


class _FailingRunner:
    """Runner double that always fails like a timed-out command."""

    def run(self, command: str) -> str:
        """Raise a substitution error for every command."""

        raise SubstitutionError(command, "Command timed out after 1 seconds.")


def test_resolve_replaces_span_with_chomped_output() -> None:
    """Command output should replace the span without one trailing newline."""

    runner = _StubRunner({"echo hi": "hi\n\n"})
    provider = CommandSubstitution(runner)

    assert provider.resolve("say $(echo hi)!", {}, False) == "say hi\n!"
    assert runner.commands == ["echo hi"]


def test_resolve_handles_nested_parentheses() -> None:
    """Balanced inner parentheses should stay part of one command."""

    runner = _StubRunner({"echo $(date) (x)": "ok"})
    provider = CommandSubstitution(runner)

    assert provider.resolve("$(echo $(date) (x))", {}, False) == "ok"


def test_resolve_keeps_escaped_and_unbalanced_spans() -> None:
    """Escaped spans lose the backslash; unbalanced or empty spans stay literal."""

    runner = _StubRunner({"b": "B"})
    provider = CommandSubstitution(runner)

    assert provider.resolve(r"\$(echo hi) $() $(a $(b)", {}, False) == "$(echo hi) $() $(a B"
    assert runner.commands == ["b"]


def test_resolve_leaves_failed_commands_literal() -> None:
    """A failing command should leave its span in place and not abort."""

    provider = CommandSubstitution(_FailingRunner())

    assert provider.resolve("x=$(sleep 5)", {}, False) == "x=$(sleep 5)"


def test_shell_runner_returns_stdout_even_on_nonzero_exit(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Non-zero exit codes should still yield captured output."""

    captured: dict[str, object] = {}

    def _fake_run(args: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        """Record subprocess arguments and return a failed process."""

        captured["args"] = args
        captured["timeout"] = kwargs["timeout"]
        return subprocess.CompletedProcess(args, 3, stdout="partial\n")

    monkeypatch.setattr(command_module.subprocess, "run", _fake_run)
    runner = ShellCommandRunner(shell="/bin/sh", timeout_seconds=2.5)

    assert runner.run("false") == "partial\n"
    assert captured == {"args": ["/bin/sh", "-c", "false"], "timeout": 2.5}


def test_shell_runner_maps_timeouts_to_substitution_errors(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Timeouts should surface as `SubstitutionError` carrying the command."""

    def _fake_run(args: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        """Simulate an expired timeout."""

        raise subprocess.TimeoutExpired(args, 1.0)

    monkeypatch.setattr(command_module.subprocess, "run", _fake_run)
    runner = ShellCommandRunner(shell="/bin/sh", timeout_seconds=1.0)

    with pytest.raises(SubstitutionError, match="timed out") as exc_info:
        runner.run("sleep 5")

    assert exc_info.value.command == "sleep 5"
    assert exc_info.value.stage == "substitution"


def test_shell_runner_maps_missing_shell_to_substitution_error(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A shell that cannot start should surface as `SubstitutionError`."""

    def _fake_run(args: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        """Simulate a missing executable."""

        raise FileNotFoundError(2, "No such file or directory", args[0])

    monkeypatch.setattr(command_module.subprocess, "run", _fake_run)
    runner = ShellCommandRunner(shell="/missing/sh")

    with pytest.raises(SubstitutionError, match="could not be started"):
        runner.run("echo hi")


def _undecodable_run(args: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
    """Simulate a command printing bytes that are not valid UTF-8."""

    raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")


def test_shell_runner_maps_undecodable_output_to_substitution_error(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Output that cannot be decoded should surface as `SubstitutionError`."""

    monkeypatch.setattr(command_module.subprocess, "run", _undecodable_run)
    runner = ShellCommandRunner(shell="/bin/sh")

    with pytest.raises(SubstitutionError, match="not valid text") as exc_info:
        runner.run("printf '\\377'")

    assert exc_info.value.command == "printf '\\377'"


def test_undecodable_output_only_affects_its_own_value(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A command with undecodable output should not abort the rest of the parse."""

    monkeypatch.setattr(command_module.subprocess, "run", _undecodable_run)
    pipeline = SubstitutionPipeline(
        [
            VariableSubstitution(environ={}),
            CommandSubstitution(ShellCommandRunner(shell="/bin/sh")),
        ]
    )

    values = Parser(pipeline).parse("A=$(printf x)\nB=ok\n")

    assert values == {"A": "$(printf x)", "B": "ok"}
