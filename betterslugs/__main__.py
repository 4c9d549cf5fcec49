"""Module entrypoint for running the CLI as ``python -m betterslugs``."""

from __future__ import annotations

from betterslugs.cli import main


if __name__ == "__main__":
    main()
