"""
themeforge.commands - External Command Execution
================================================

All subprocess calls (package managers, Shopify CLI, git, husky) go through
:func:`run_command` so they are logged the same way and fail the same way.

Commands run one at a time. By default the child's output streams straight
to the terminal, which keeps long installs and interactive Shopify CLI
logins visible; ``capture=True`` collects output for commands whose result
is parsed (``shopify theme list --json``, ``git rev-parse``).
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a successful command. Output is empty unless captured."""

    argv: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""


class CommandError(RuntimeError):
    """
    A command exited non-zero or its executable was not found.

    Attributes
    ----------
    argv : list[str]
        The command line that failed.

    returncode : int | None
        Exit status, or None when the executable is missing.

    stderr : str
        Captured standard error (empty for streamed commands).
    """

    def __init__(
        self,
        argv: list[str],
        returncode: int | None,
        stderr: str = "",
    ) -> None:
        self.argv = argv
        self.returncode = returncode
        self.stderr = stderr

        if returncode is None:
            message = f"command not found: {argv[0]}"
        else:
            message = f"`{format_argv(argv)}` exited with status {returncode}"
        if stderr.strip():
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)


def format_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_command(
    argv: Sequence[str],
    *,
    cwd: Path,
    capture: bool = False,
) -> CommandResult:
    """
    Run a command and raise if it fails.

    Parameters
    ----------
    argv : Sequence[str]
        Command line, executable first.

    cwd : Path
        Working directory for the command.

    capture : bool, default=False
        Collect stdout/stderr instead of streaming them to the terminal.

    Returns
    -------
    CommandResult
        The exit status and any captured output.

    Raises
    ------
    CommandError
        If the executable is missing or the command exits non-zero.
    """
    argv_list = list(argv)
    logger.info("CMD %s (cwd=%s)", format_argv(argv_list), cwd)

    try:
        proc = subprocess.run(
            argv_list,
            cwd=cwd,
            capture_output=capture,
            text=True,
            check=False,
        )
    except FileNotFoundError as e:
        raise CommandError(argv_list, None) from e

    stdout = proc.stdout or ""
    stderr = proc.stderr or ""

    if stdout:
        logger.debug("STDOUT %s", stdout.strip())
    if stderr:
        logger.debug("STDERR %s", stderr.strip())

    if proc.returncode != 0:
        raise CommandError(argv_list, proc.returncode, stderr)

    return CommandResult(
        argv=argv_list,
        returncode=proc.returncode,
        stdout=stdout,
        stderr=stderr,
    )


def command_succeeds(argv: Sequence[str], *, cwd: Path) -> bool:
    """Run a captured probe command and report whether it exited zero."""
    try:
        run_command(argv, cwd=cwd, capture=True)
    except CommandError:
        return False
    return True
