from .commands import HELP_ROWS, SessionCommands, resolve_record
from .console import QuizConsole
from .dispatcher import (
    CommandSpec,
    Dispatcher,
    build_command_specs,
    run_shell,
)
from .errors import ErrorKind, QuizError, render_error
from .game import (
    GameEngine,
    GamePhase,
    GameResult,
    GameState,
    abort,
    apply_answer,
    begin_step,
    draw,
    initial_state,
)
from .prompter import Prompter
from .repository import QuizRecord, QuizRepository
from .validation import ValidatedId, answers_match, validate_id

__all__ = [
    "HELP_ROWS",
    "SessionCommands",
    "resolve_record",
    "QuizConsole",
    "CommandSpec",
    "Dispatcher",
    "build_command_specs",
    "run_shell",
    "ErrorKind",
    "QuizError",
    "render_error",
    "GameEngine",
    "GamePhase",
    "GameResult",
    "GameState",
    "abort",
    "apply_answer",
    "begin_step",
    "draw",
    "initial_state",
    "Prompter",
    "QuizRecord",
    "QuizRepository",
    "ValidatedId",
    "answers_match",
    "validate_id",
]
