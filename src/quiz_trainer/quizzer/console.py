"""Rich-backed output for the quiz shell.

User supplied text (questions, answers) is always wrapped in ``Text`` so
square brackets are never interpreted as Rich markup.
"""

from __future__ import annotations

from rich import box
from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

TextLike = str | Text


class QuizConsole:
    """Line, error and banner output on top of a Rich ``Console``."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)

    def line(self, text: TextLike = "") -> None:
        self.console.print(_as_text(text))

    def error_line(self, text: TextLike) -> None:
        message = Text.assemble(
            ("Error", "bold red"), ": ", _as_text(text).copy()
        )
        message.stylize("red", 7)
        self.console.print(message)

    def banner(self, text: object, style: str) -> None:
        """Render ``text`` enlarged inside a heavy panel."""

        label = Text(str(text).upper(), style=f"bold {style}")
        self.console.print(
            Panel(
                Align.center(label),
                box=box.HEAVY,
                border_style=style,
                padding=(1, 4),
                expand=False,
            )
        )

    @staticmethod
    def style(text: object, color: str) -> Text:
        return Text(str(text), style=color)


def _as_text(value: TextLike) -> Text:
    if isinstance(value, Text):
        return value
    return Text(str(value))
