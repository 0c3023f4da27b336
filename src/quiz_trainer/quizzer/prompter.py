"""Blocking question/answer prompts for the quiz shell."""

from __future__ import annotations

import sys
from typing import Callable, Optional

from rich.text import Text

from .console import QuizConsole

try:
    import readline
except ImportError:  # pragma: no cover - platforms without GNU readline
    readline = None  # type: ignore[assignment]

InputProvider = Callable[[], str]


class Prompter:
    """Render a styled prompt, read one line, return it stripped.

    Without an ``input_provider`` the line is read with Rich's
    ``Console.input``; tests inject an iterator's ``__next__``. End of input
    is not caught here: ``EOFError`` travels up to the shell loop, which ends
    the session.
    """

    def __init__(
        self,
        console: QuizConsole,
        input_provider: Optional[InputProvider] = None,
        *,
        style: str = "red",
        interactive: Optional[bool] = None,
    ) -> None:
        self._console = console
        self._input: Optional[InputProvider] = input_provider
        self._style = style
        if interactive is None:
            interactive = input_provider is None and sys.stdin.isatty()
        self._interactive = bool(interactive) and readline is not None
        self._pending: Optional[str] = None
        self.last_prefill: Optional[str] = None

    def prefill(self, text: str) -> None:
        """Pre-populate the line buffer of the next :meth:`ask`."""

        self._pending = text

    def ask(self, prompt_text: str, *, style: Optional[str] = None) -> str:
        prompt = Text(prompt_text, style=style or self._style)
        prefill, self._pending = self._pending, None
        self.last_prefill = prefill
        hooked = bool(prefill) and self._interactive
        if hooked:
            readline.set_startup_hook(lambda: readline.insert_text(prefill))
        try:
            raw = self._read(prompt)
        finally:
            if hooked:
                readline.set_startup_hook()
        return raw.strip()

    def _read(self, prompt: Text) -> str:
        if self._input is None:
            return self._console.console.input(prompt)
        self._console.console.print(prompt, end="")
        return self._input()
