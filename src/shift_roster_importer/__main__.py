"""Module entry point for `python -m shift_roster_importer`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
