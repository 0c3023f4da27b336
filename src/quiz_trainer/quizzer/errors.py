"""Error kinds raised inside command and game pipelines."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:  # pragma: no cover
    from .console import QuizConsole


class ErrorKind(str, Enum):
    MISSING_PARAMETER = "missing_parameter"
    NOT_A_NUMBER = "not_a_number"
    NOT_FOUND = "not_found"
    FIELD_VALIDATION = "field_validation"
    GENERIC_FAILURE = "generic_failure"


class QuizError(Exception):
    """A handled failure; ``kind`` decides how it is rendered.

    ``messages`` is only populated for ``FIELD_VALIDATION`` and holds one
    entry per rejected field.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        messages: Sequence[str] = (),
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.messages = tuple(messages)

    @classmethod
    def missing_parameter(cls) -> "QuizError":
        return cls(ErrorKind.MISSING_PARAMETER, "Missing parameter <id>.")

    @classmethod
    def not_a_number(cls, raw: object) -> "QuizError":
        return cls(
            ErrorKind.NOT_A_NUMBER,
            f"The value of parameter <id> is not a number: {raw!r}.",
        )

    @classmethod
    def not_found(cls, record_id: int) -> "QuizError":
        return cls(
            ErrorKind.NOT_FOUND,
            f"There is no quiz with id={record_id}.",
        )

    @classmethod
    def field_validation(cls, messages: Sequence[str]) -> "QuizError":
        return cls(
            ErrorKind.FIELD_VALIDATION, "The quiz is invalid:", messages
        )

    @classmethod
    def generic(cls, message: str) -> "QuizError":
        return cls(ErrorKind.GENERIC_FAILURE, message)


def render_error(console: "QuizConsole", error: QuizError) -> None:
    """Write ``error`` to the console, one line per field message."""

    if error.kind is ErrorKind.FIELD_VALIDATION:
        console.error_line(error.message)
        for message in error.messages:
            console.error_line(message)
    elif error.kind in (
        ErrorKind.MISSING_PARAMETER,
        ErrorKind.NOT_A_NUMBER,
        ErrorKind.NOT_FOUND,
        ErrorKind.GENERIC_FAILURE,
    ):
        console.error_line(error.message)
    else:  # pragma: no cover - new kinds must be handled above
        raise AssertionError(f"Unhandled error kind: {error.kind}")
