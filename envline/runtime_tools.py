"""Host capability checks for command substitution."""

from __future__ import annotations

import shutil


def resolve_executable(command_name: str) -> str | None:
    """Return the full path of `command_name` on `PATH`, or `None`.

    Names containing a directory are checked directly. Blank names never
    resolve, so callers can drop the command provider.
    """

    normalized = command_name.strip()
    if not normalized:
        return None
    return shutil.which(normalized)
