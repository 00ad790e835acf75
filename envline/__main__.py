"""Module entrypoint for running envline as ``python -m envline``."""

from __future__ import annotations

from envline.cli import main


if __name__ == "__main__":
    main()
