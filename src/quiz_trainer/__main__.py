"""Module entrypoint for `python -m quiz_trainer`."""

from __future__ import annotations

from .cli import main

if __name__ == "__main__":  # pragma: no cover - manual invocation guard
    raise SystemExit(main())
