"""Randomized play mode: every quiz once, stop at the first wrong answer.

The flow is split into a pure state machine (``GameState`` and the
transition functions) and :class:`GameEngine`, which performs the IO for
each transition. Tests can drive the transitions without a console.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from .commands import resolve_record
from .console import QuizConsole
from .errors import QuizError, render_error
from .prompter import Prompter
from .repository import QuizRepository
from .validation import answers_match


class GamePhase(str, Enum):
    RUNNING = "running"
    WON = "won"
    LOST = "lost"
    ABORTED = "aborted"


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of one game run."""

    pool: tuple[int, ...]
    score: int = 0
    phase: GamePhase = GamePhase.RUNNING

    @property
    def finished(self) -> bool:
        return self.phase is not GamePhase.RUNNING


@dataclass(frozen=True)
class GameResult:
    phase: GamePhase
    score: int
    asked: tuple[int, ...]


def initial_state(record_ids: Iterable[int]) -> GameState:
    return GameState(pool=tuple(sorted(set(record_ids))))


def begin_step(state: GameState) -> GameState:
    """Finish the game as won once nothing is left to ask."""

    _require_running(state)
    if not state.pool:
        return replace(state, phase=GamePhase.WON)
    return state


def draw(state: GameState, rng: random.Random) -> tuple[int, GameState]:
    """Pick a pooled id uniformly at random and remove it from the pool."""

    _require_running(state)
    if not state.pool:
        raise ValueError("Cannot draw from an empty pool.")
    index = rng.randrange(len(state.pool))
    picked = state.pool[index]
    remaining = state.pool[:index] + state.pool[index + 1 :]
    return picked, replace(state, pool=remaining)


def apply_answer(state: GameState, *, correct: bool) -> GameState:
    _require_running(state)
    if correct:
        return replace(state, score=state.score + 1)
    return replace(state, phase=GamePhase.LOST)


def abort(state: GameState) -> GameState:
    _require_running(state)
    return replace(state, phase=GamePhase.ABORTED)


def _require_running(state: GameState) -> None:
    if state.finished:
        raise ValueError(f"Game already finished ({state.phase.value}).")


class GameEngine:
    """Plays one game per :meth:`play` call against the repository."""

    def __init__(
        self,
        repository: QuizRepository,
        console: QuizConsole,
        prompter: Prompter,
        *,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.repository = repository
        self.console = console
        self.prompter = prompter
        self._rng = rng or random.Random()
        self._logger = logger or logging.getLogger(__name__)

    def play(self) -> GameResult:
        state = initial_state(
            record.id for record in self.repository.find_all()
        )
        asked: list[int] = []
        try:
            while True:
                state = begin_step(state)
                if state.finished:
                    self.console.line("No more questions.")
                    break
                record_id, state = draw(state, self._rng)
                try:
                    record = resolve_record(self.repository, record_id)
                except QuizError as exc:
                    render_error(self.console, exc)
                    state = abort(state)
                    break
                asked.append(record.id)
                answer = self.prompter.ask(f"{record.question}: ")
                state = apply_answer(
                    state, correct=answers_match(answer, record.answer)
                )
                if state.finished:
                    self.console.line("INCORRECT")
                    break
                self.console.line(f"CORRECT - {state.score} correct so far.")
                self.console.banner("Correct", "green")
        except EOFError:
            raise
        except Exception as exc:
            render_error(self.console, QuizError.generic(str(exc)))
            self._logger.error(
                "Game failed",
                exc_info=True,
                extra={"event": "game.error", "asked": len(asked)},
            )
            if not state.finished:
                state = abort(state)

        self.console.line("Game over. Correct answers:")
        self.console.banner(state.score, "magenta")
        self._logger.info(
            "Game finished",
            extra={
                "event": "game.finished",
                "phase": state.phase.value,
                "score": state.score,
                "asked": len(asked),
            },
        )
        return GameResult(state.phase, state.score, tuple(asked))
