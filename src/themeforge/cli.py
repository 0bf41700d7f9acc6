"""
themeforge.cli - Command Line Interface
=======================================

This module provides the ``themeforge`` command using Typer. It runs the
setup wizard in the current directory (or ``--directory``), shows a summary
of the answers, asks for confirmation and then runs every setup step.

Usage Examples
--------------
Interactive mode (numbered menus):
    $ themeforge

Arrow-key menus:
    $ themeforge --arrow-keys

Save the answers of an interactive run:
    $ themeforge --save-answers answers.toml

Non-interactive, from a saved answers file:
    $ themeforge --answers answers.toml --yes

An answers file uses the ``SetupConfig`` field names::

    project_name = "acme-store"
    package_manager = "npm"
    toml_approach = "cli"

Exit Codes
----------
0 on completion or when the user declines the summary; 1 when the
project name is missing or invalid, the answers file can't be loaded, or
setup fails outside a step. Failures inside a step are reported and do
not change the exit code.

See Also
--------
- wizard.py: The question sequence
- generator.py: The setup steps
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from themeforge import __version__
from themeforge.generator import run_setup
from themeforge.logging_utils import configure_logging
from themeforge.models import TUNNEL_VITE_VERSION, SetupConfig, TomlApproach
from themeforge.prompts import ConsolePrompter, QuestionaryPrompter
from themeforge.shopify import list_themes
from themeforge.wizard import ask_questions, header


# =============================================================================
# CLI Application Setup
# =============================================================================

app = typer.Typer(
    name="themeforge",
    help="Interactive setup for Vite-powered Shopify theme development.",
    rich_markup_mode="rich",
    add_completion=False,
)

# Console for rich output
console = Console()


# =============================================================================
# Version Callback
# =============================================================================

def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(Panel(
            f"[bold green]themeforge[/] version [cyan]{__version__}[/]\n\n"
            f"[dim]Shopify theme development environment setup[/]\n"
            f"[dim]Stack: Vite + vite-plugin-shopify + Shopify CLI[/]",
            border_style="green",
        ))
        raise typer.Exit()


# =============================================================================
# Summary
# =============================================================================

def build_summary(config: SetupConfig) -> Table:
    """
    Build the table of answers shown before setup starts.

    Store URL and theme id rows are only included when they are set.
    """
    table = Table(title="Configuration Summary", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Project Name", escape(config.project_name))
    table.add_row("Styling", config.styling_approach.value)
    table.add_row("JavaScript", config.js_approach.label)
    table.add_row("Package Manager", config.package_manager.value)
    table.add_row(
        "Cloudflare Tunnel",
        f"enabled (Vite {TUNNEL_VITE_VERSION})"
        if config.enable_tunnel
        else "disabled",
    )
    table.add_row("Store Config", config.toml_approach.label)
    if config.toml_approach == TomlApproach.FILE and config.store_url:
        table.add_row("Store URL", escape(config.store_url))
    table.add_row("Linting", config.linting_setup.label)
    table.add_row("Git Hooks", "enabled" if config.git_hooks else "disabled")
    table.add_row("Environment", config.shopify_environment)
    if config.theme_id is not None:
        table.add_row("Theme ID", escape(config.theme_id))

    return table


# =============================================================================
# Main Command
# =============================================================================

@app.command()
def setup(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    directory: Annotated[
        Path,
        typer.Option(
            "--directory",
            "-C",
            help="Theme directory to set up (default: current directory)",
            file_okay=False,
            dir_okay=True,
        ),
    ] = Path("."),
    answers: Annotated[
        Path | None,
        typer.Option(
            "--answers",
            "-a",
            help="Read answers from a TOML file instead of prompting",
            exists=True,
            file_okay=True,
            dir_okay=False,
        ),
    ] = None,
    save_answers: Annotated[
        Path | None,
        typer.Option(
            "--save-answers",
            help="Write the answers to a TOML file for later --answers runs",
            file_okay=True,
            dir_okay=False,
        ),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip the confirmation prompt",
        ),
    ] = False,
    arrow_keys: Annotated[
        bool,
        typer.Option(
            "--arrow-keys",
            help="Use arrow-key menus instead of numbered choices",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log every command run and its output",
        ),
    ] = False,
) -> None:
    """
    Set up a Shopify theme development environment.

    Asks a series of questions, then creates:

    - [cyan]package.json[/] with dev/build/deploy scripts
    - [cyan]vite.config.js[/] and PostCSS configuration
    - Frontend entrypoints, ignore files and a GitHub Actions workflow
    - [cyan]shopify.theme.toml[/], linting and git hooks

    [bold]Examples:[/]

        themeforge
        themeforge --directory ./my-theme --arrow-keys
        themeforge --answers answers.toml --yes
    """
    configure_logging(verbose)

    root = directory.resolve()
    root.mkdir(parents=True, exist_ok=True)
    prompter = QuestionaryPrompter(console) if arrow_keys else ConsolePrompter(console)

    if answers is not None:
        try:
            config = SetupConfig.from_toml(answers)
        except (OSError, ValueError) as e:
            rprint(f"[red]Error:[/] Could not load answers from {escape(str(answers))}: {escape(str(e))}")
            raise typer.Exit(1)
    else:
        config = ask_questions(prompter, theme_lister=lambda: list_themes(root))

    if save_answers is not None:
        try:
            config.save_toml(save_answers)
            console.print(f"[green]✓ Answers saved to {escape(str(save_answers))}[/]")
        except OSError as e:
            console.print(f"[yellow]⚠ Could not save answers: {escape(str(e))}[/]")

    header(console, "Configuration Summary")
    console.print(build_summary(config))
    console.print()

    if not yes and not prompter.confirm("Proceed with setup? (y/n):"):
        console.print("[yellow]Setup cancelled.[/]")
        raise typer.Exit()

    try:
        result = run_setup(config, root)
    except (typer.Exit, typer.Abort):
        raise
    except Exception as e:
        console.print(f"[red]✗ Setup failed with error:[/] {escape(str(e))}")
        raise typer.Exit(1)

    if result.errors:
        console.print(
            f"\n[yellow]{len(result.errors)} step(s) failed; "
            "see the messages above to finish them by hand.[/]"
        )


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    app()
