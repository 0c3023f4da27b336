"""Command table and the idle read loop of the quiz shell."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Sequence

from .commands import SessionCommands
from .console import QuizConsole
from .errors import QuizError, render_error
from .game import GameEngine
from .prompter import Prompter

CommandHandler = Callable[[Optional[str]], object]


@dataclass(frozen=True)
class CommandSpec:
    """One shell command and the names it answers to."""

    names: tuple[str, ...]
    handler: Optional[CommandHandler] = None
    takes_argument: bool = False

    @property
    def quits(self) -> bool:
        return self.handler is None


def build_command_specs(
    commands: SessionCommands, game: GameEngine
) -> Sequence[CommandSpec]:
    return (
        CommandSpec(("h", "help"), lambda _: commands.help()),
        CommandSpec(("list",), lambda _: commands.list_all()),
        CommandSpec(("show",), commands.show, takes_argument=True),
        CommandSpec(("add",), lambda _: commands.add()),
        CommandSpec(("delete",), commands.delete, takes_argument=True),
        CommandSpec(("edit",), commands.edit, takes_argument=True),
        CommandSpec(("test",), commands.test, takes_argument=True),
        CommandSpec(("p", "play"), lambda _: game.play()),
        CommandSpec(("credits",), lambda _: commands.credits()),
        CommandSpec(("q", "quit")),
    )


class Dispatcher:
    """Route an input line to its handler by the first token."""

    def __init__(
        self,
        specs: Sequence[CommandSpec],
        console: QuizConsole,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._console = console
        self._logger = logger or logging.getLogger(__name__)
        self.commands: Mapping[str, CommandSpec] = {
            name: spec for spec in specs for name in spec.names
        }

    def dispatch(self, line: str) -> bool:
        """Run ``line``; return False when the shell should end."""

        tokens = line.split()
        if not tokens:
            return True
        head = tokens[0].lower()
        spec = self.commands.get(head)
        if spec is None:
            self._console.error_line(f"Unknown command: '{head}'")
            self._console.line("Use 'help' to see every available command.")
            return True
        if spec.quits:
            return False
        argument = None
        if spec.takes_argument and len(tokens) > 1:
            argument = tokens[1]
        self._logger.debug(
            "Dispatching command",
            extra={"event": "command.dispatch", "command": spec.names[-1]},
        )
        spec.handler(argument)
        return True


def run_shell(
    dispatcher: Dispatcher,
    prompter: Prompter,
    console: QuizConsole,
    *,
    prompt: str = "quiz > ",
    prompt_style: str = "blue",
) -> int:
    """Read and dispatch lines until quit or end of input."""

    while True:
        try:
            line = prompter.ask(prompt, style=prompt_style)
            if not dispatcher.dispatch(line):
                break
        except (EOFError, KeyboardInterrupt):
            console.line()
            break
        except UnicodeDecodeError as exc:
            render_error(console, QuizError.generic(str(exc)))
    console.line("Bye!")
    return 0
