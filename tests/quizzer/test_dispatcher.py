from __future__ import annotations

from types import SimpleNamespace

import pytest

from fixtures import make_provider
from quiz_trainer.quizzer import (
    CommandSpec,
    Dispatcher,
    Prompter,
    QuizConsole,
    build_command_specs,
    run_shell,
)


class RecordingCommands:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str | None]] = []

    def __getattr__(self, name: str):
        def _handler(*args):
            self.calls.append((name, args[0] if args else None))

        return _handler


@pytest.fixture
def recorded(console: QuizConsole):
    commands = RecordingCommands()
    game = SimpleNamespace(play=lambda: commands.calls.append(("play", None)))
    dispatcher = Dispatcher(build_command_specs(commands, game), console)
    return dispatcher, commands


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("h", ("help", None)),
        ("HELP", ("help", None)),
        ("list", ("list_all", None)),
        ("show 3", ("show", "3")),
        ("  show   abc  extra", ("show", "abc")),
        ("show", ("show", None)),
        ("add", ("add", None)),
        ("delete 1", ("delete", "1")),
        ("edit 2", ("edit", "2")),
        ("test 4", ("test", "4")),
        ("p", ("play", None)),
        ("play", ("play", None)),
        ("credits", ("credits", None)),
        ("add ignored", ("add", None)),
    ],
)
def test_dispatch_routes_by_first_token(recorded, line, expected) -> None:
    dispatcher, commands = recorded

    assert dispatcher.dispatch(line) is True
    assert commands.calls == [expected]


@pytest.mark.parametrize("line", ["q", "quit", "Quit"])
def test_dispatch_quit_returns_false(recorded, line) -> None:
    dispatcher, commands = recorded

    assert dispatcher.dispatch(line) is False
    assert commands.calls == []


def test_dispatch_blank_line_is_ignored(recorded, console) -> None:
    dispatcher, commands = recorded

    assert dispatcher.dispatch("   ") is True
    assert commands.calls == []
    assert console.console.export_text() == ""


def test_dispatch_unknown_command_hints_help(recorded, console) -> None:
    dispatcher, commands = recorded

    assert dispatcher.dispatch("frobnicate 1") is True

    output = console.console.export_text()
    assert "Unknown command: 'frobnicate'" in output
    assert "help" in output
    assert commands.calls == []


def test_command_spec_without_handler_quits() -> None:
    assert CommandSpec(("q",)).quits
    assert not CommandSpec(("h",), lambda _: None).quits


def test_run_shell_prompts_once_per_command(recorded, console) -> None:
    dispatcher, commands = recorded
    provider = make_provider(["list", "", "show 1", "quit", "never read"])
    prompter = Prompter(console, provider)

    code = run_shell(dispatcher, prompter, console, prompt="quiz > ")

    assert code == 0
    assert provider.calls == 4
    assert commands.calls == [("list_all", None), ("show", "1")]
    output = console.console.export_text()
    assert output.count("quiz > ") == 4
    assert output.rstrip().endswith("Bye!")


def test_run_shell_ends_on_end_of_input(recorded, console) -> None:
    dispatcher, commands = recorded
    prompter = Prompter(console, make_provider(["help"]))

    assert run_shell(dispatcher, prompter, console) == 0
    assert commands.calls == [("help", None)]
    assert "Bye!" in console.console.export_text()


def test_run_shell_ends_when_input_closes_mid_command(console) -> None:
    def _closing(_argument):
        raise EOFError

    dispatcher = Dispatcher([CommandSpec(("add",), _closing)], console)
    provider = make_provider(["add", "list"])

    code = run_shell(dispatcher, Prompter(console, provider), console)

    assert code == 0
    assert provider.calls == 1


def test_run_shell_reports_undecodable_line_and_continues(
    recorded, console
) -> None:
    dispatcher, commands = recorded
    lines = iter(["list", None, "credits", "q"])

    def provider() -> str:
        line = next(lines)
        if line is None:
            raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "bad byte")
        return line

    code = run_shell(dispatcher, Prompter(console, provider), console)

    assert code == 0
    assert commands.calls == [("list_all", None), ("credits", None)]
    output = console.console.export_text()
    assert "Error: 'utf-8' codec can't decode byte 0xff" in output
    assert output.rstrip().endswith("Bye!")
