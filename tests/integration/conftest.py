"""Integration-test fixtures for deterministic CLI behavior."""

from __future__ import annotations

from pathlib import Path

import pytest

from envline.config import ENV_COMMAND_SUBSTITUTION, ENV_COMMAND_TIMEOUT, ENV_SHELL


@pytest.fixture(autouse=True)
def _clear_envline_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every CLI test with default parser settings."""

    for name in (ENV_COMMAND_SUBSTITUTION, ENV_COMMAND_TIMEOUT, ENV_SHELL):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_source(tmp_path: Path):
    """Return a helper writing one configuration file under `tmp_path`."""

    def _write(text: str, name: str = ".env") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
