from __future__ import annotations

import json
from pathlib import Path

import pytest

from quiz_trainer.quizzer import ErrorKind, QuizError, QuizRepository
from quiz_trainer.quizzer.repository import SAMPLE_QUIZZES
from quiz_trainer.quizzer.utils import write_jsonl


def _rows(path: Path) -> list[dict]:
    return [
        json.loads(line)
        for line in path.read_text(encoding="utf-8").splitlines()
        if line.strip()
    ]


def test_new_store_is_seeded_with_samples(tmp_path: Path) -> None:
    path = tmp_path / "data" / "quizzes.jsonl"

    repository = QuizRepository(path)

    assert repository.count() == len(SAMPLE_QUIZZES)
    assert [row["id"] for row in _rows(path)] == [1, 2, 3, 4]
    first = repository.find_by_id(1)
    assert first is not None
    assert (first.question, first.answer) == SAMPLE_QUIZZES[0]


def test_seeding_can_be_disabled(tmp_path: Path) -> None:
    path = tmp_path / "quizzes.jsonl"

    repository = QuizRepository(path, seed_defaults=False)

    assert repository.count() == 0
    assert not path.exists()


def test_create_persists_and_reloads(tmp_path: Path) -> None:
    path = tmp_path / "quizzes.jsonl"
    repository = QuizRepository(path, seed_defaults=False)

    created = repository.create("2 + 2", "4")

    reloaded = QuizRepository(path)
    assert created.id == 1
    assert [r.question for r in reloaded.find_all()] == ["2 + 2"]


def test_create_reports_every_empty_field(tmp_path: Path) -> None:
    repository = QuizRepository(tmp_path / "q.jsonl", seed_defaults=False)

    with pytest.raises(QuizError) as excinfo:
        repository.create("", "  ")

    assert excinfo.value.kind is ErrorKind.FIELD_VALIDATION
    assert len(excinfo.value.messages) == 2
    assert repository.count() == 0


def test_ids_are_not_reused_after_delete(tmp_path: Path) -> None:
    repository = QuizRepository(tmp_path / "q.jsonl", seed_defaults=False)
    first = repository.create("a", "1")
    second = repository.create("b", "2")

    assert repository.destroy(second.id) == 1
    third = repository.create("c", "3")

    assert third.id not in (first.id, second.id)
    assert [r.id for r in repository.find_all()] == [first.id, third.id]


def test_destroy_missing_id_is_a_no_op(tmp_path: Path) -> None:
    repository = QuizRepository(tmp_path / "q.jsonl")

    assert repository.destroy(999) == 0
    assert repository.count() == len(SAMPLE_QUIZZES)


def test_find_returns_copies_until_saved(tmp_path: Path) -> None:
    repository = QuizRepository(tmp_path / "q.jsonl")
    record = repository.find_by_id(2)
    assert record is not None

    record.answer = "Lyon"
    assert repository.find_by_id(2).answer == "Paris"

    repository.save(record)
    assert repository.find_by_id(2).answer == "Lyon"


def test_save_validates_fields_and_existence(tmp_path: Path) -> None:
    repository = QuizRepository(tmp_path / "q.jsonl")
    record = repository.find_by_id(1)
    assert record is not None
    record.question = ""

    with pytest.raises(QuizError) as invalid:
        repository.save(record)
    assert invalid.value.kind is ErrorKind.FIELD_VALIDATION
    assert repository.find_by_id(1).question == SAMPLE_QUIZZES[0][0]

    repository.destroy(1)
    record.question = "Capital of Italy"
    with pytest.raises(QuizError) as missing:
        repository.save(record)
    assert missing.value.kind is ErrorKind.NOT_FOUND


def test_malformed_store_raises_generic_failure(tmp_path: Path) -> None:
    path = tmp_path / "q.jsonl"
    path.write_text('{"id": "one", "question": "q", "answer": "a"}\n')

    with pytest.raises(QuizError) as excinfo:
        QuizRepository(path)

    assert excinfo.value.kind is ErrorKind.GENERIC_FAILURE


def test_write_failure_keeps_memory_state(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    repository = QuizRepository(tmp_path / "q.jsonl")

    def _fail(path, records):
        raise PermissionError("read-only")

    monkeypatch.setattr(
        "quiz_trainer.quizzer.repository.write_jsonl", _fail
    )

    with pytest.raises(QuizError) as excinfo:
        repository.create("New", "Quiz")

    assert excinfo.value.kind is ErrorKind.GENERIC_FAILURE
    assert repository.count() == len(SAMPLE_QUIZZES)


def test_unencodable_text_raises_generic_failure(tmp_path: Path) -> None:
    path = tmp_path / "q.jsonl"
    repository = QuizRepository(path)
    before = path.read_bytes()

    with pytest.raises(QuizError) as excinfo:
        repository.create("caf\udce9?", "yes")

    assert excinfo.value.kind is ErrorKind.GENERIC_FAILURE
    assert path.read_bytes() == before
    assert repository.count() == len(SAMPLE_QUIZZES)


def test_failed_write_removes_temporary_file(tmp_path: Path) -> None:
    path = tmp_path / "q.jsonl"
    write_jsonl(path, [{"id": 1, "question": "Q", "answer": "A"}])

    with pytest.raises(UnicodeEncodeError):
        write_jsonl(path, [{"id": 1, "question": "\udce9", "answer": "A"}])

    assert _rows(path) == [{"id": 1, "question": "Q", "answer": "A"}]
    assert not (tmp_path / "q.jsonl.tmp").exists()
