"""JSON Lines backed storage for quiz records."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from .errors import QuizError
from .utils import read_jsonl, write_jsonl

SAMPLE_QUIZZES: tuple[tuple[str, str], ...] = (
    ("Capital of Italy", "Rome"),
    ("Capital of France", "Paris"),
    ("Capital of Spain", "Madrid"),
    ("Capital of Portugal", "Lisbon"),
)


@dataclass
class QuizRecord:
    """One question/answer pair. ``id`` is assigned by the repository."""

    id: int
    question: str
    answer: str


class QuizRepository:
    """Keeps every record in memory and rewrites the file on each change.

    Identifiers grow monotonically from the highest id seen, so an id is
    never handed out twice while the process runs even after deletions.
    Callers receive copies; mutating one has no effect until :meth:`save`.
    """

    def __init__(
        self,
        path: Path,
        *,
        seed_defaults: bool = True,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.path = Path(path)
        self._logger = logger or logging.getLogger(__name__)
        self._records: dict[int, QuizRecord] = {}
        self._next_id = 1
        if self.path.exists():
            self._records = self._load()
            self._next_id = max(self._records, default=0) + 1
        elif seed_defaults:
            self._seed()

    def find_all(self) -> list[QuizRecord]:
        return [replace(self._records[key]) for key in sorted(self._records)]

    def find_by_id(self, record_id: int) -> Optional[QuizRecord]:
        record = self._records.get(record_id)
        return replace(record) if record is not None else None

    def count(self) -> int:
        return len(self._records)

    def create(self, question: str, answer: str) -> QuizRecord:
        _check_fields(question, answer)
        record = QuizRecord(self._next_id, question, answer)
        self._commit({**self._records, record.id: record})
        self._next_id += 1
        self._logger.debug(
            "Created quiz", extra={"event": "quiz.create", "id": record.id}
        )
        return replace(record)

    def save(self, record: QuizRecord) -> QuizRecord:
        if record.id not in self._records:
            raise QuizError.not_found(record.id)
        _check_fields(record.question, record.answer)
        stored = replace(record)
        self._commit({**self._records, stored.id: stored})
        self._logger.debug(
            "Saved quiz", extra={"event": "quiz.save", "id": stored.id}
        )
        return replace(stored)

    def destroy(self, record_id: int) -> int:
        """Delete ``record_id`` if present and return how many rows went."""

        if record_id not in self._records:
            return 0
        remaining = {
            key: value
            for key, value in self._records.items()
            if key != record_id
        }
        self._commit(remaining)
        self._logger.debug(
            "Deleted quiz", extra={"event": "quiz.destroy", "id": record_id}
        )
        return 1

    def _seed(self) -> None:
        records = {
            idx: QuizRecord(idx, question, answer)
            for idx, (question, answer) in enumerate(SAMPLE_QUIZZES, start=1)
        }
        self._commit(records)
        self._next_id = len(records) + 1
        self._logger.info(
            "Seeded quiz store",
            extra={"event": "quiz.seed", "path": self.path},
        )

    def _load(self) -> dict[int, QuizRecord]:
        try:
            rows = read_jsonl(self.path)
        except (OSError, ValueError) as exc:
            raise QuizError.generic(
                f"Could not read quiz store {self.path}: {exc}"
            ) from exc
        records: dict[int, QuizRecord] = {}
        for lineno, row in enumerate(rows, start=1):
            record = _record_from_row(row)
            if record is None or record.id in records:
                raise QuizError.generic(
                    f"Malformed quiz record #{lineno} in {self.path}"
                )
            records[record.id] = record
        return records

    def _commit(self, records: Mapping[int, QuizRecord]) -> None:
        try:
            write_jsonl(
                self.path, [asdict(records[key]) for key in sorted(records)]
            )
        except (OSError, ValueError) as exc:
            raise QuizError.generic(
                f"Could not write quiz store {self.path}: {exc}"
            ) from exc
        self._records = dict(records)


def _check_fields(question: str, answer: str) -> None:
    messages = []
    if not question.strip():
        messages.append("The question must not be empty.")
    if not answer.strip():
        messages.append("The answer must not be empty.")
    if messages:
        raise QuizError.field_validation(messages)


def _record_from_row(row: object) -> Optional[QuizRecord]:
    if not isinstance(row, dict):
        return None
    record_id = row.get("id")
    question = row.get("question")
    answer = row.get("answer")
    if isinstance(record_id, bool) or not isinstance(record_id, int):
        return None
    if record_id <= 0:
        return None
    if not isinstance(question, str) or not isinstance(answer, str):
        return None
    return QuizRecord(record_id, question, answer)
