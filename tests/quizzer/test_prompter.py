from __future__ import annotations

import pytest

from fixtures import make_provider
from quiz_trainer.quizzer import Prompter, QuizConsole


def test_ask_strips_input_and_renders_prompt(console: QuizConsole) -> None:
    prompter = Prompter(console, make_provider(["  Rome  "]))

    assert prompter.ask("Capital of Italy: ") == "Rome"
    assert "Capital of Italy:" in console.console.export_text()


def test_ask_accepts_blank_lines(console: QuizConsole) -> None:
    prompter = Prompter(console, make_provider(["   "]))

    assert prompter.ask("Anything? ") == ""


def test_ask_propagates_end_of_input(console: QuizConsole) -> None:
    prompter = Prompter(console, make_provider([]))

    with pytest.raises(EOFError):
        prompter.ask("Question: ")


def test_prefill_applies_to_next_question_only(console: QuizConsole) -> None:
    seen: list[str | None] = []

    def provider() -> str:
        seen.append(prompter.last_prefill)
        return "typed"

    prompter = Prompter(console, provider, interactive=False)
    prompter.prefill("current text")
    prompter.ask("First: ")
    prompter.ask("Second: ")

    assert seen == ["current text", None]


def test_ask_reads_through_rich_console_by_default(
    console: QuizConsole, monkeypatch: pytest.MonkeyPatch
) -> None:
    prompts: list[str] = []

    def fake_input(prompt) -> str:
        prompts.append(str(prompt))
        return "  Paris "

    monkeypatch.setattr(console.console, "input", fake_input)
    prompter = Prompter(console, interactive=False)

    assert prompter.ask("Capital of France: ") == "Paris"
    assert prompts == ["Capital of France: "]
