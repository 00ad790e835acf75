"""Substitution provider factory helpers.

Responsibilities:
- Build the default ordered substitution pipeline from `ParserSettings`.
- Decide host capability for command substitution at construction time.

Notes:
- Command substitution is left out of the pipeline when it is switched off or
  when no shell executable can be resolved; `$(...)` spans then stay literal.
"""

from __future__ import annotations

from typing import Mapping

from .config import ParserSettings
from .runtime_tools import resolve_executable
from .substitutions import (
    CommandSubstitution,
    ShellCommandRunner,
    Substitution,
    SubstitutionPipeline,
    VariableSubstitution,
)
from .telemetry.logger import RunLogger


class ProviderFactory:
    """Factory for substitution providers used by the parser facade."""

    @staticmethod
    def create_variable_substitution(
        environ: Mapping[str, str] | None = None,
    ) -> VariableSubstitution:
        """Create the variable provider reading `environ` (default: `os.environ`)."""

        return VariableSubstitution(environ=environ)

    @staticmethod
    def create_command_substitution(
        settings: ParserSettings,
        run_logger: RunLogger | None = None,
    ) -> CommandSubstitution | None:
        """Create the command provider, or `None` when the host cannot run commands."""

        if not settings.command_substitution:
            return None
        shell = resolve_executable(settings.shell)
        if shell is None:
            return None
        runner = ShellCommandRunner(
            shell=shell,
            timeout_seconds=settings.command_timeout_seconds,
            run_logger=run_logger,
        )
        return CommandSubstitution(runner, run_logger=run_logger)

    @staticmethod
    def create_pipeline(
        settings: ParserSettings | None = None,
        environ: Mapping[str, str] | None = None,
        run_logger: RunLogger | None = None,
    ) -> SubstitutionPipeline:
        """Create the default pipeline: variables first, then commands."""

        resolved_settings = settings if settings is not None else ParserSettings.from_env()
        resolved_settings.validate()

        providers: list[Substitution] = [
            ProviderFactory.create_variable_substitution(environ)
        ]
        command = ProviderFactory.create_command_substitution(resolved_settings, run_logger)
        if command is not None:
            providers.append(command)
        return SubstitutionPipeline(providers)
