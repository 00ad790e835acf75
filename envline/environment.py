"""Process environment write-back for parsed values."""

from __future__ import annotations

import os
from typing import Mapping, MutableMapping


def apply_to_environment(
    values: Mapping[str, str],
    environ: MutableMapping[str, str] | None = None,
    overwrite: bool = False,
) -> dict[str, str]:
    """Copy parsed values into an environment mapping.

    Args:
        values: Resolved key/value pairs.
        environ: Target mapping; defaults to `os.environ`.
        overwrite: Replace keys that already exist in the target.

    Returns:
        The subset of `values` actually written.
    """

    target = environ if environ is not None else os.environ
    applied: dict[str, str] = {}
    for key, value in values.items():
        if overwrite or key not in target:
            target[key] = value
            applied[key] = value
    return applied
