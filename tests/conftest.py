"""Shared pytest fixtures for the full envline test suite."""

from __future__ import annotations

from typing import Callable, Iterator, Mapping

import pytest
from loguru import logger

from envline.errors import SubstitutionError
from envline.parser.facade import Parser
from envline.substitutions import (
    CommandSubstitution,
    Substitution,
    SubstitutionPipeline,
    VariableSubstitution,
)


class RecordingRunner:
    """Command runner double returning canned output and recording commands."""

    def __init__(
        self,
        outputs: Mapping[str, str] | None = None,
        error: SubstitutionError | None = None,
    ) -> None:
        self.outputs = dict(outputs or {})
        self.error = error
        self.commands: list[str] = []

    def run(self, command: str) -> str:
        """Record one command and return its canned output."""

        self.commands.append(command)
        if self.error is not None:
            raise self.error
        return self.outputs.get(command, "")


@pytest.fixture(autouse=True)
def _mute_envline_logs() -> Iterator[None]:
    """Restore the muted library logger after tests that enable CLI logging."""

    yield
    logger.remove()
    logger.disable("envline")


@pytest.fixture
def recording_runner() -> RecordingRunner:
    """Provide a runner that answers `echo hi` with `hi\\n`."""

    return RecordingRunner({"echo hi": "hi\n"})


@pytest.fixture
def make_parser() -> Callable[..., Parser]:
    """Build parsers over an isolated ambient environment.

    The returned factory accepts `environ` (ambient values, default empty) and
    an optional `runner`; without a runner no command provider is registered.
    """

    def _factory(
        environ: Mapping[str, str] | None = None,
        runner: RecordingRunner | None = None,
    ) -> Parser:
        providers: list[Substitution] = [VariableSubstitution(environ=dict(environ or {}))]
        if runner is not None:
            providers.append(CommandSubstitution(runner))
        return Parser(SubstitutionPipeline(providers))

    return _factory
