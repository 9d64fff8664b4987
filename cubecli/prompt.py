"""Interactive single-choice prompts.

The scaffolder only ever asks one question (which database to use), so the
abstraction is a single ``choose`` call.  :class:`RichChooser` talks to the
terminal; :class:`StaticChooser` answers without one.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from rich.console import Console
from rich.prompt import Prompt

from .utils import console as default_console


class Chooser(Protocol):
    """Picks one entry out of *choices*."""

    def choose(self, message: str, choices: Sequence[str]) -> str: ...


class RichChooser:
    """Numbered list prompt on the terminal.

    The user may answer with either the number shown next to an entry or the
    entry itself.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or default_console

    def choose(self, message: str, choices: Sequence[str]) -> str:
        if not choices:
            raise ValueError("Nothing to choose from")
        options = list(choices)
        self.console.print(f"[bold]?[/bold] {message}")
        for index, choice in enumerate(options, start=1):
            self.console.print(f"  [cyan]{index:>2}[/cyan]) {choice}")

        accepted = [str(i) for i in range(1, len(options) + 1)] + options
        answer = Prompt.ask(
            "Choice",
            console=self.console,
            choices=accepted,
            show_choices=False,
            default="1",
        )
        if answer.isdigit():
            return options[int(answer) - 1]
        return answer


class StaticChooser:
    """Returns a preset answer and records every question it was asked."""

    def __init__(self, answer: str) -> None:
        self.answer = answer
        self.calls: list[tuple[str, list[str]]] = []

    def choose(self, message: str, choices: Sequence[str]) -> str:
        self.calls.append((message, list(choices)))
        if self.answer not in choices:
            raise ValueError(f"{self.answer!r} is not one of {list(choices)}")
        return self.answer
