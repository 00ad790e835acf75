"""Command substitution (`$(command)`) backed by a shell runner.

Responsibilities:
- Find `$(...)` spans with balanced parentheses and replace them with command output.
- Keep failed or unbalanced spans literally in place, like an unexpanded shell word.
"""

from __future__ import annotations

import subprocess
from typing import Mapping, Protocol

from ..errors import SubstitutionError
from ..telemetry.logger import RunLogger


class CommandRunner(Protocol):
    """Protocol for executing one substituted command."""

    def run(self, command: str) -> str:
        """Run `command` and return its captured standard output."""


class ShellCommandRunner:
    """Run commands through `<shell> -c` with a wall-clock timeout."""

    def __init__(
        self,
        shell: str,
        timeout_seconds: float | None = None,
        run_logger: RunLogger | None = None,
    ) -> None:
        self.shell = shell
        self.timeout_seconds = timeout_seconds
        self._run_logger = run_logger if run_logger is not None else RunLogger()

    def run(self, command: str) -> str:
        """Run one command and return stdout, even when the exit status is non-zero.

        Raises:
            SubstitutionError: If the command times out, cannot be started, or
                prints output that cannot be decoded.
        """

        try:
            result = subprocess.run(
                [self.shell, "-c", command],
                check=False,
                stdout=subprocess.PIPE,
                text=True,
                timeout=self.timeout_seconds,
            )
        except subprocess.TimeoutExpired as exc:
            raise SubstitutionError(
                command, f"Command timed out after {self.timeout_seconds} seconds."
            ) from exc
        except OSError as exc:
            raise SubstitutionError(command, f"Command could not be started: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise SubstitutionError(
                command, f"Command output is not valid text: {exc.reason}."
            ) from exc

        if result.returncode != 0:
            self._run_logger.log_command_exit_status(result.returncode)
        return result.stdout


class CommandSubstitution:
    """Replace `$(...)` spans with the output of running their contents.

    `\\$(...)` stays literal with the backslash removed. Output loses one
    trailing line break. Variable references inside the span have already
    been resolved when this provider runs after `VariableSubstitution`.
    """

    def __init__(self, runner: CommandRunner, run_logger: RunLogger | None = None) -> None:
        self._runner = runner
        self._run_logger = run_logger if run_logger is not None else RunLogger()

    def resolve(self, value: str, env: Mapping[str, str], is_load: bool) -> str:
        pieces: list[str] = []
        index = 0
        while True:
            start = value.find("$(", index)
            if start < 0:
                break
            closing = _closing_paren(value, start + 1)
            if closing is None or closing == start + 2:
                pieces.append(value[index : start + 2])
                index = start + 2
                continue

            span = value[start : closing + 1]
            if start > 0 and value[start - 1] == "\\":
                pieces.append(value[index : start - 1])
                pieces.append(span)
            else:
                pieces.append(value[index:start])
                pieces.append(self._run(span))
            index = closing + 1

        pieces.append(value[index:])
        return "".join(pieces)

    def _run(self, span: str) -> str:
        try:
            output = self._runner.run(span[2:-1])
        except SubstitutionError as exc:
            self._run_logger.log_command_failure(type(exc.__cause__ or exc).__name__)
            return span
        return _chomp(output)


def _closing_paren(value: str, open_index: int) -> int | None:
    """Return the index of the `)` balancing the `(` at `open_index`."""

    depth = 0
    for index in range(open_index, len(value)):
        character = value[index]
        if character == "(":
            depth += 1
        elif character == ")":
            depth -= 1
            if depth == 0:
                return index
    return None


def _chomp(output: str) -> str:
    if output.endswith("\r\n"):
        return output[:-2]
    if output.endswith(("\n", "\r")):
        return output[:-1]
    return output
