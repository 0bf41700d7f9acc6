"""Diagnostic logging setup.

User-facing progress goes through the rich consoles in the other modules;
this logger only carries command traces for ``--verbose`` runs.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Configure the ``themeforge`` logger.

    WARNING and above are shown by default; ``verbose`` lowers the level to
    DEBUG so every command line and its captured output is printed.
    Calling this again only updates the level.
    """
    logger = logging.getLogger("themeforge")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if any(isinstance(h, RichHandler) for h in logger.handlers):
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.propagate = False
