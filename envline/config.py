"""Parser settings and their environment loader.

Responsibilities:
- Define parser runtime settings as a typed, frozen dataclass.
- Read overrides from `ENVLINE_*` environment variables with strict validation.

Key types:
- `ParserSettings`: command substitution switches and limits for one parser.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping

from .normalization import (
    normalize_optional_string,
    parse_positive_float,
    parse_required_boolean,
)


_DEFAULT_COMMAND_TIMEOUT_SECONDS = 10.0
_DEFAULT_SHELL = "sh"

ENV_COMMAND_SUBSTITUTION = "ENVLINE_COMMAND_SUBSTITUTION"
ENV_COMMAND_TIMEOUT = "ENVLINE_COMMAND_TIMEOUT"
ENV_SHELL = "ENVLINE_SHELL"


@dataclass(frozen=True, slots=True)
class ParserSettings:
    """Runtime settings shared by parser construction helpers.

    Attributes:
        command_substitution: Whether `$(...)` spans are executed at all.
        command_timeout_seconds: Wall-clock limit for one substituted command.
        shell: Shell executable used to run substituted commands.
    """

    command_substitution: bool = True
    command_timeout_seconds: float = _DEFAULT_COMMAND_TIMEOUT_SECONDS
    shell: str = _DEFAULT_SHELL

    def validate(self) -> None:
        """Validate settings values before a parser is built."""

        if self.command_timeout_seconds <= 0:
            raise ValueError("`command_timeout_seconds` must be a positive number.")
        if normalize_optional_string(self.shell) is None:
            raise ValueError("`shell` must be a non-empty executable name.")

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> ParserSettings:
        """Build settings from `ENVLINE_*` variables, falling back to defaults."""

        env_map = env if env is not None else os.environ

        command_substitution = True
        raw_switch = normalize_optional_string(env_map.get(ENV_COMMAND_SUBSTITUTION))
        if raw_switch is not None:
            command_substitution = parse_required_boolean(raw_switch, ENV_COMMAND_SUBSTITUTION)

        timeout = _DEFAULT_COMMAND_TIMEOUT_SECONDS
        raw_timeout = normalize_optional_string(env_map.get(ENV_COMMAND_TIMEOUT))
        if raw_timeout is not None:
            timeout = parse_positive_float(raw_timeout, ENV_COMMAND_TIMEOUT)

        shell = normalize_optional_string(env_map.get(ENV_SHELL)) or _DEFAULT_SHELL

        settings = cls(
            command_substitution=command_substitution,
            command_timeout_seconds=timeout,
            shell=shell,
        )
        settings.validate()
        return settings
