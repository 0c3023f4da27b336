"""Shared testing helpers for the quiz trainer test suite."""

from .session import (  # noqa: F401
    ScriptedInput,
    make_console,
    make_provider,
    seeded_repository,
)

__all__ = [
    "ScriptedInput",
    "make_console",
    "make_provider",
    "seeded_repository",
]
