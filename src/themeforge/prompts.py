"""
themeforge.prompts - Prompt Backends
====================================

The wizard asks three kinds of questions: free text, a choice from a menu
and a yes/no confirmation. This module provides two interchangeable
backends for them:

ConsolePrompter
    The default. Line based: menus are rendered as numbered lists and the
    answer is typed as a number. Works in any terminal, over pipes and
    inside test runners.

QuestionaryPrompter
    Arrow-key menus built on questionary, enabled with ``--arrow-keys``.
    Needs a real TTY.

Both backends raise ``typer.Abort`` when the user cancels (Ctrl-C or end
of input), which the CLI turns into a non-zero exit.
"""

from __future__ import annotations

from typing import Protocol

import questionary
import typer
from rich.console import Console
from rich.markup import escape


class Prompter(Protocol):
    """Interface the wizard talks to."""

    console: Console

    def ask(self, question: str) -> str:
        """Ask a free-text question and return the stripped answer."""
        ...

    def select(self, question: str, options: list[str]) -> int:
        """Offer ``options`` and return the 0-based index of the choice."""
        ...

    def confirm(self, question: str) -> bool:
        """Ask a yes/no question."""
        ...


class ConsolePrompter:
    """
    Numbered, line-based prompts on a rich console.

    Parameters
    ----------
    console : Console | None
        Console to render on and read from. Defaults to a new Console.

    Examples
    --------
    A menu renders as::

        Which package manager will you use?
          1. Bun (Recommended - 3-10x faster, modern, built-in TypeScript)
          2. npm (Standard Node.js package manager)
        Enter your choice (1-2):
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def _read_line(self) -> str:
        try:
            return self.console.input()
        except (EOFError, KeyboardInterrupt):
            self.console.print()
            raise typer.Abort()

    def ask(self, question: str) -> str:
        self.console.print(f"[yellow]{escape(question)}[/]")
        return self._read_line().strip()

    def select(self, question: str, options: list[str]) -> int:
        """
        Render a numbered menu until the user types a valid number.

        Anything that is not an integer between 1 and ``len(options)``
        prints an error and shows the menu again.
        """
        if not options:
            msg = "select() needs at least one option"
            raise ValueError(msg)

        while True:
            self.console.print(f"[yellow]{escape(question)}[/]")
            for number, option in enumerate(options, 1):
                self.console.print(f"[cyan]  {number}. {escape(option)}[/]")

            answer = self.ask(f"Enter your choice (1-{len(options)}):")
            try:
                choice = int(answer)
            except ValueError:
                choice = 0

            if 1 <= choice <= len(options):
                return choice - 1

            self.console.print("[red]Invalid choice. Please try again.[/]")

    def confirm(self, question: str) -> bool:
        return self.ask(question).lower() in {"y", "yes"}


class QuestionaryPrompter:
    """
    Arrow-key prompts built on questionary.

    questionary returns None when the user presses Ctrl-C; that is
    treated as an abort, matching the numbered backend.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def ask(self, question: str) -> str:
        result = questionary.text(question).ask()

        if result is None:
            raise typer.Abort()

        return result.strip()

    def select(self, question: str, options: list[str]) -> int:
        choices = [
            questionary.Choice(title=option, value=index)
            for index, option in enumerate(options)
        ]

        result = questionary.select(question, choices=choices).ask()

        if result is None:
            raise typer.Abort()

        return result

    def confirm(self, question: str) -> bool:
        result = questionary.confirm(question, default=True).ask()

        if result is None:
            raise typer.Abort()

        return result
