"""Variable reference substitution (`$NAME`, `${NAME}`, `${NAME:-default}`)."""

from __future__ import annotations

from collections import ChainMap
import os
import re
from typing import Mapping


_VARIABLE = re.compile(
    r"""
    (?P<backslash>\\)?                  # escaped with a backslash
    \$
    (?!\()                              # `$(` is a command, not a variable
    (?:
        \{(?P<braced>[A-Za-z0-9_]+)(?P<operator>:?-)(?P<default>[^}]*)\}
        |
        \{?(?P<name>[A-Za-z0-9_]+)?\}?
    )
    """,
    re.VERBOSE,
)


class VariableSubstitution:
    """Resolve variable references against parsed and ambient values.

    Lookup precedence depends on `is_load`:
    - `True` (fresh load): the ambient environment wins over parsed values,
      since loading never replaces variables the process already has.
    - `False` (overlay): parsed values win over the ambient environment.

    Missing names resolve to an empty string unless a default is given.
    `${NAME:-default}` uses the default when NAME is unset or empty,
    `${NAME-default}` only when it is unset.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def resolve(self, value: str, env: Mapping[str, str], is_load: bool) -> str:
        ambient = self._environ if self._environ is not None else os.environ
        lookup = ChainMap(ambient, env) if is_load else ChainMap(env, ambient)
        return self._substitute(value, lookup)

    def _substitute(self, value: str, lookup: Mapping[str, str]) -> str:
        return _VARIABLE.sub(lambda match: self._replacement(match, lookup), value)

    def _replacement(self, match: re.Match[str], lookup: Mapping[str, str]) -> str:
        variable = match.group(0)
        if match.group("backslash"):
            return variable[1:]

        braced = match.group("braced")
        if braced is not None:
            current = lookup.get(braced)
            use_default = current is None or (
                match.group("operator") == ":-" and current == ""
            )
            if use_default:
                return self._substitute(match.group("default"), lookup)
            return current

        name = match.group("name")
        if name is None:
            return variable
        return lookup.get(name, "")
