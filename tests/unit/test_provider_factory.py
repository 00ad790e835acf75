"""Unit tests for default substitution pipeline construction."""

from __future__ import annotations

from pytest import MonkeyPatch

from envline import provider_factory
from envline.config import ParserSettings
from envline.provider_factory import ProviderFactory
from envline.substitutions import CommandSubstitution, VariableSubstitution


def test_create_pipeline_orders_variables_before_commands(monkeypatch: MonkeyPatch) -> None:
    """The default pipeline should resolve variables first, then commands."""

    monkeypatch.setattr(provider_factory, "resolve_executable", lambda _: "/bin/sh")

    pipeline = ProviderFactory.create_pipeline(ParserSettings(), environ={})

    assert [type(provider) for provider in pipeline.providers] == [
        VariableSubstitution,
        CommandSubstitution,
    ]


def test_create_pipeline_omits_commands_when_disabled(monkeypatch: MonkeyPatch) -> None:
    """Switching command substitution off should shorten the pipeline."""

    monkeypatch.setattr(provider_factory, "resolve_executable", lambda _: "/bin/sh")

    pipeline = ProviderFactory.create_pipeline(
        ParserSettings(command_substitution=False), environ={}
    )

    assert len(pipeline) == 1
    assert isinstance(pipeline.providers[0], VariableSubstitution)


def test_create_command_substitution_requires_a_shell(monkeypatch: MonkeyPatch) -> None:
    """Hosts without a resolvable shell should get no command provider."""

    monkeypatch.setattr(provider_factory, "resolve_executable", lambda _: None)

    assert ProviderFactory.create_command_substitution(ParserSettings()) is None


def test_create_command_substitution_uses_settings(monkeypatch: MonkeyPatch) -> None:
    """The shell runner should receive the resolved shell and the timeout."""

    monkeypatch.setattr(provider_factory, "resolve_executable", lambda name: f"/opt/{name}")

    provider = ProviderFactory.create_command_substitution(
        ParserSettings(command_timeout_seconds=4.0, shell="zsh")
    )

    assert provider is not None
    runner = provider._runner
    assert runner.shell == "/opt/zsh"
    assert runner.timeout_seconds == 4.0


def test_create_pipeline_reads_settings_from_environment(monkeypatch: MonkeyPatch) -> None:
    """Without explicit settings the `ENVLINE_*` variables should apply."""

    monkeypatch.setenv("ENVLINE_COMMAND_SUBSTITUTION", "false")

    assert len(ProviderFactory.create_pipeline(environ={})) == 1
