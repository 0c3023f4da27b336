"""Single-record command flows: show, list, add, edit, delete and test."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Optional

from rich.text import Text

from .console import QuizConsole
from .errors import QuizError, render_error
from .prompter import Prompter
from .repository import QuizRecord, QuizRepository
from .validation import answers_match, validate_id

HELP_ROWS: tuple[tuple[str, str], ...] = (
    ("h|help", "Show this help."),
    ("list", "List the existing quizzes."),
    ("show <id>", "Show the question and answer of a quiz."),
    ("add", "Add a new quiz interactively."),
    ("delete <id>", "Delete a quiz."),
    ("edit <id>", "Edit a quiz."),
    ("test <id>", "Test yourself on a quiz."),
    ("p|play", "Play: answer every quiz in random order."),
    ("credits", "Show the credits."),
    ("q|quit", "Leave the program."),
)


def resolve_record(
    repository: QuizRepository, raw: str | int | None
) -> QuizRecord:
    """Validate ``raw`` and fetch its record or raise ``NOT_FOUND``."""

    record_id = validate_id(raw)
    record = repository.find_by_id(record_id)
    if record is None:
        raise QuizError.not_found(record_id)
    return record


class SessionCommands:
    """Command handlers sharing one error policy.

    Each public method runs inside :meth:`_pipeline`: a :class:`QuizError`
    raised anywhere in the flow is rendered and logged, then the method
    returns normally so the shell can read the next command. Any other
    exception except end of input is reported as a generic failure.
    """

    def __init__(
        self,
        repository: QuizRepository,
        console: QuizConsole,
        prompter: Prompter,
        *,
        credits: Sequence[str] = (),
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.repository = repository
        self.console = console
        self.prompter = prompter
        self.credits_names = tuple(credits)
        self._logger = logger or logging.getLogger(__name__)

    @contextmanager
    def _pipeline(self, command: str) -> Iterator[None]:
        try:
            yield
        except QuizError as exc:
            render_error(self.console, exc)
            self._logger.warning(
                exc.message,
                extra={
                    "event": "command.error",
                    "command": command,
                    "kind": exc.kind.value,
                    "messages": list(exc.messages),
                },
            )
        except EOFError:
            raise
        except Exception as exc:
            error = QuizError.generic(str(exc))
            render_error(self.console, error)
            self._logger.error(
                "Command failed",
                exc_info=True,
                extra={
                    "event": "command.error",
                    "command": command,
                    "kind": error.kind.value,
                },
            )

    def help(self) -> None:
        width = max(len(usage) for usage, _ in HELP_ROWS)
        self.console.line("Commands:")
        for usage, summary in HELP_ROWS:
            self.console.line(f"  {usage.ljust(width)}  {summary}")

    def list_all(self) -> None:
        with self._pipeline("list"):
            for record in self.repository.find_all():
                self.console.line(
                    Text.assemble(
                        " [",
                        self.console.style(record.id, "magenta"),
                        "]: ",
                        record.question,
                    )
                )

    def show(self, raw_id: Optional[str]) -> None:
        with self._pipeline("show"):
            record = resolve_record(self.repository, raw_id)
            self.console.line(self._describe(record))

    def add(self) -> None:
        with self._pipeline("add"):
            question = self.prompter.ask(" Enter a question: ")
            answer = self.prompter.ask(" Enter the answer: ")
            record = self.repository.create(question, answer)
            self.console.line(
                Text.assemble(
                    " ",
                    self.console.style("Added", "magenta"),
                    ": ",
                    self._pair(record),
                )
            )

    def delete(self, raw_id: Optional[str]) -> None:
        with self._pipeline("delete"):
            record_id = validate_id(raw_id)
            removed = self.repository.destroy(record_id)
            self._logger.info(
                "Delete requested",
                extra={
                    "event": "quiz.delete",
                    "id": record_id,
                    "removed": removed,
                },
            )

    def edit(self, raw_id: Optional[str]) -> None:
        with self._pipeline("edit"):
            record = resolve_record(self.repository, raw_id)
            self.prompter.prefill(record.question)
            question = self.prompter.ask(" Enter the question: ")
            self.prompter.prefill(record.answer)
            answer = self.prompter.ask(" Enter the answer: ")
            record.question = question
            record.answer = answer
            saved = self.repository.save(record)
            self.console.line(
                Text.assemble(
                    " Quiz ",
                    self.console.style(saved.id, "magenta"),
                    " changed to: ",
                    self._pair(saved),
                )
            )

    def test(self, raw_id: Optional[str]) -> None:
        with self._pipeline("test"):
            record = resolve_record(self.repository, raw_id)
            answer = self.prompter.ask(f"{record.question}: ")
            if answers_match(answer, record.answer):
                self.console.line("Your answer is correct.")
                self.console.banner("Correct", "green")
            else:
                self.console.line("Your answer is incorrect.")
                self.console.banner("Incorrect", "red")

    def credits(self) -> None:
        self.console.line("Authors:")
        for name in self.credits_names:
            self.console.line(self.console.style(name, "green"))

    def _describe(self, record: QuizRecord) -> Text:
        return Text.assemble(
            " [",
            self.console.style(record.id, "magenta"),
            "]: ",
            self._pair(record),
        )

    def _pair(self, record: QuizRecord) -> Text:
        return Text.assemble(
            record.question,
            " ",
            self.console.style("=>", "magenta"),
            " ",
            record.answer,
        )
