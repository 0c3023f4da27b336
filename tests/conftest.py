from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterator

import pytest

TESTS_DIR = Path(__file__).resolve().parent
ROOT = TESTS_DIR.parent
for extra in (TESTS_DIR, ROOT / "src"):
    path_str = str(extra)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

from fixtures import make_console, seeded_repository  # noqa: E402
from quiz_trainer.quizzer import QuizConsole, QuizRepository  # noqa: E402

CAPITALS = (
    ("Capital of Italy", "Rome"),
    ("Capital of France", "Paris"),
    ("Capital of Spain", "Madrid"),
)


@pytest.fixture
def console() -> QuizConsole:
    """Recording console; see ``console.console.export_text()``."""

    return make_console()


@pytest.fixture
def repository(tmp_path: Path) -> QuizRepository:
    return seeded_repository(tmp_path / "quizzes.jsonl", CAPITALS)


@pytest.fixture(autouse=True)
def _isolate_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[None]:
    monkeypatch.setenv("QUIZ_TRAINER_HOME", str(tmp_path / "home"))
    monkeypatch.delenv("QUIZ_TRAINER_CONFIG", raising=False)
    yield
    logger = logging.getLogger("quiz_trainer")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
