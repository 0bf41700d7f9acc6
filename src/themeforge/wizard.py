"""
themeforge.wizard - The Setup Question Sequence
===============================================

:func:`ask_questions` walks the user through every decision the setup steps
need and returns a validated :class:`~themeforge.models.SetupConfig`.

Question Order
--------------
1. Project/store name (required)
2. Styling approach
3. JavaScript approach
4. Package manager
5. Cloudflare tunnel
6. Store access (shopify.theme.toml / CLI login / skip) and store URL
7. Linting
8. Git hooks
9. Base theme from the connected store and environment name
10. Store type and description (for CLAUDE.md)

Every menu lists the recommended option first, so pressing 1 throughout
gives the recommended setup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer
from pydantic import ValidationError
from rich.markup import escape

from themeforge.models import (
    DEFAULT_ENVIRONMENT,
    TUNNEL_VITE_VERSION,
    JsApproach,
    LintingSetup,
    PackageManager,
    SetupConfig,
    StoreType,
    StylingApproach,
    TomlApproach,
    is_valid_environment,
    normalize_store_url,
)


if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from themeforge.models import ShopifyTheme
    from themeforge.prompts import Prompter


# =============================================================================
# Output Helpers
# =============================================================================

def header(console: Console, title: str) -> None:
    """Print a full-width banner between major phases."""
    console.print()
    console.rule(f"[bold cyan]{title}[/]", characters="=")
    console.print()


def section(console: Console, title: str, *notes: str) -> None:
    """Print a section heading followed by yellow explanatory notes."""
    console.print()
    console.rule(f"[bold cyan]{title}[/]", characters="─")
    for note in notes:
        console.print(f"[yellow]{note}[/]")
    console.print()


def _choose(prompter: Prompter, question: str, members: list) -> object:
    """Offer enum members by their descriptions and return the chosen one."""
    index = prompter.select(question, [m.description for m in members])
    return members[index]


def _yes_no(prompter: Prompter, question: str, yes: str, no: str) -> bool:
    return prompter.select(question, [yes, no]) == 0


# =============================================================================
# Individual Questions
# =============================================================================

def prompt_project_name(prompter: Prompter) -> str:
    """
    Ask for the project name and stop the wizard if it is unusable.

    Raises
    ------
    typer.Exit
        With code 1 when the name is empty or invalid.
    """
    console = prompter.console
    console.print("[cyan]Let's start with some basic information about your project.[/]\n")
    name = prompter.ask(
        "📦 What is your project/store name? (e.g., 'acme-store', 'my-boutique'):"
    )

    if not name:
        console.print("[red]⚠️  Project name is required. Please try again.[/]")
        raise typer.Exit(1)

    try:
        SetupConfig(project_name=name)
    except ValidationError as e:
        reason = "; ".join(err["msg"] for err in e.errors())
        console.print(f"[red]Error:[/] {escape(reason)}")
        raise typer.Exit(1)

    return name


def prompt_styling(prompter: Prompter) -> StylingApproach:
    console = prompter.console
    section(
        console,
        "🎨 CSS Setup",
        "Choose your styling approach. We recommend plain CSS with CSS variables "
        "for most Shopify themes.",
        "Note: This template enforces semantic class names (NO Tailwind-style utility classes).",
    )
    styling = _choose(prompter, "Which styling approach will you use?", list(StylingApproach))

    if styling == StylingApproach.TAILWIND:
        console.print(
            "\n[yellow]⚠️  Note: While Tailwind is supported, this template's guidelines "
            "emphasize semantic class names.[/]"
        )
        console.print(
            "[yellow]You'll need to adapt the CLAUDE.md guidelines if you choose to use "
            "utility classes.[/]\n"
        )

    return styling


def prompt_js(prompter: Prompter) -> JsApproach:
    section(
        prompter.console,
        "⚙️  JavaScript Setup",
        "Choose between vanilla JavaScript or TypeScript. Vanilla JS is simpler for "
        "most Shopify themes.",
    )
    return _choose(prompter, "Which JavaScript approach will you use?", list(JsApproach))


def prompt_package_manager(prompter: Prompter) -> PackageManager:
    section(
        prompter.console,
        "📦 Package Manager",
        "We strongly recommend Bun - it's 3-10x faster than npm/yarn and has built-in "
        "TypeScript support.",
    )
    return _choose(prompter, "Which package manager will you use?", list(PackageManager))


def prompt_tunnel(prompter: Prompter) -> bool:
    console = prompter.console
    section(
        console,
        "🔧 Development Environment",
        "For Shopify theme editor development, we recommend using Cloudflare tunnel "
        "to avoid CORS issues.",
        "This requires cloudflared to be installed (brew install cloudflared).",
    )
    enabled = _yes_no(
        prompter,
        "Do you want to enable Cloudflare tunnel for theme editor development?",
        "Yes (Recommended - enables HTTPS tunnel for theme editor)",
        "No (I'll configure HTTPS with mkcert or work without theme editor)",
    )

    if enabled:
        console.print("\n[green]✓ Cloudflare tunnel will be enabled in vite.config.js[/]")
        console.print(
            f"[green]✓ Vite will be locked to version {TUNNEL_VITE_VERSION} "
            "(required for tunnel support)[/]"
        )
        console.print("[yellow]Make sure to install cloudflared: brew install cloudflared[/]\n")

    return enabled


def prompt_store_access(prompter: Prompter) -> tuple[TomlApproach, str]:
    """Ask how the store is configured; returns the approach and store URL."""
    console = prompter.console
    section(
        console,
        "📄 Shopify Theme Configuration",
        "The shopify.theme.toml file stores your store URL and theme IDs for "
        "different environments.",
        "This file will be added to .gitignore at the end of setup to protect your credentials.",
    )
    approach = _choose(
        prompter,
        "How would you like to configure Shopify store access?",
        list(TomlApproach),
    )

    store_url = ""
    if approach == TomlApproach.FILE:
        store_url = normalize_store_url(
            prompter.ask("\n🏪 Enter your Shopify store URL (e.g., your-store.myshopify.com):")
        )
        console.print(f"[green]✓ Store URL: {escape(store_url or '(will be configured later)')}[/]")
    elif approach == TomlApproach.CLI:
        console.print("\n[green]✓ You'll use Shopify CLI authentication[/]")
        console.print("[yellow]  Run 'shopify auth login' to authenticate before development[/]")
    else:
        console.print(
            "\n[yellow]⏭️  Skipping store configuration. You can set this up later.[/]"
        )

    return approach, store_url


def prompt_linting(prompter: Prompter) -> LintingSetup:
    console = prompter.console
    section(
        console,
        "🔍 Code Quality Tools",
        "Linting helps catch errors and enforce consistent code style.",
    )
    linting = _choose(prompter, "Which linting setup would you like?", list(LintingSetup))

    if linting == LintingSetup.ESLINT_PRETTIER:
        console.print("\n[green]✓ ESLint + Prettier will be configured[/]")
        console.print("[cyan]  Format on save and pre-commit checks included[/]")
    elif linting == LintingSetup.THEME_CHECK:
        console.print("\n[green]✓ Theme Check will be configured for Liquid linting[/]")

    return linting


def prompt_git_hooks(prompter: Prompter) -> bool:
    console = prompter.console
    section(
        console,
        "🪝 Git Hooks",
        "Git hooks run checks before commits to catch issues early.",
    )
    enabled = _yes_no(
        prompter,
        "Would you like to set up Git hooks (husky + lint-staged)?",
        "Yes (Recommended - Run linting/formatting on staged files before commit)",
        "No (Skip Git hooks setup)",
    )

    if enabled:
        console.print("\n[green]✓ Husky + lint-staged will be configured[/]")
        console.print("[cyan]  Pre-commit hooks will format and lint staged files[/]")

    return enabled


def prompt_environment(prompter: Prompter) -> str:
    """Ask for the environment name until it is a usable TOML key."""
    while True:
        name = prompter.ask(
            "\nWhat would you like to name this environment? "
            "(e.g., 'development', 'staging', 'production'):"
        ) or DEFAULT_ENVIRONMENT

        if is_valid_environment(name):
            return name

        prompter.console.print(
            "[red]Environment names may only contain letters, numbers, hyphens, "
            "and underscores.[/]"
        )


def prompt_theme(
    prompter: Prompter,
    theme_lister: Callable[[], list[ShopifyTheme]],
) -> tuple[str | None, str]:
    """
    Offer the store's themes as a base; returns the theme id and environment.

    The environment name is only asked once a theme is picked; otherwise
    the default environment is used.
    """
    console = prompter.console
    section(
        console,
        "🛍️  Shopify Store Connection",
        "Now let's connect to your Shopify store and select a base theme.",
    )

    console.print("[cyan]Authenticating with Shopify CLI and fetching available themes...[/]")
    themes = theme_lister()

    if not themes:
        console.print("\n[yellow]⚠️  No themes found or Shopify CLI not authenticated.[/]")
        console.print(
            "[yellow]Make sure you've run 'shopify auth login' before running this setup.[/]"
        )
        console.print("[yellow]You can pull a theme later using 'shopify theme pull'[/]\n")
        return None, DEFAULT_ENVIRONMENT

    console.print("\n[green]✓ Successfully fetched themes from your store![/]\n")
    options = [theme.label for theme in themes]
    options.append("Skip - I'll configure this later")

    choice = prompter.select("Which theme would you like to use as a base?", options)

    if choice >= len(themes):
        console.print(
            "\n[yellow]⏭️  Skipping theme selection. You can pull a theme later using "
            "'shopify theme pull'[/]"
        )
        return None, DEFAULT_ENVIRONMENT

    theme = themes[choice]
    console.print(f"\n[green]✓ Selected theme: {escape(theme.name)}[/]")

    environment = prompt_environment(prompter)
    console.print(f"[green]✓ Environment will be named: {environment}[/]")

    return theme.id, environment


def prompt_project_context(prompter: Prompter) -> tuple[StoreType, str]:
    section(
        prompter.console,
        "🤖 AI Assistant Configuration",
        "Help AI assistants (like Claude) understand your project better by providing context.",
    )
    store_type = _choose(prompter, "What type of Shopify store is this?", list(StoreType))
    description = prompter.ask(
        "\n📝 Brief description of this project (optional, press Enter to skip):"
    )
    return store_type, description


# =============================================================================
# Main Question Sequence
# =============================================================================

def ask_questions(
    prompter: Prompter,
    *,
    theme_lister: Callable[[], list[ShopifyTheme]],
) -> SetupConfig:
    """
    Run the full question sequence.

    Parameters
    ----------
    prompter : Prompter
        Backend used for every question.

    theme_lister : Callable[[], list[ShopifyTheme]]
        Returns the store's themes; an empty list skips theme selection.

    Returns
    -------
    SetupConfig
        The validated answers.

    Raises
    ------
    typer.Exit
        With code 1 when the project name is missing or invalid.
    typer.Abort
        When the user cancels a prompt.
    """
    console = prompter.console

    header(console, "Shopify Theme Development Environment Setup")
    console.print(
        "[green]Welcome! This script will help you set up a modern Shopify theme "
        "development environment.[/]"
    )
    console.print(
        "[green]This setup includes Vite for fast development, your choice of package "
        "manager, and CI/CD workflows.[/]\n"
    )

    project_name = prompt_project_name(prompter)
    styling = prompt_styling(prompter)
    js = prompt_js(prompter)
    package_manager = prompt_package_manager(prompter)
    tunnel = prompt_tunnel(prompter)
    toml_approach, store_url = prompt_store_access(prompter)
    linting = prompt_linting(prompter)
    git_hooks = prompt_git_hooks(prompter)
    theme_id, environment = prompt_theme(prompter, theme_lister)
    store_type, description = prompt_project_context(prompter)

    return SetupConfig(
        project_name=project_name,
        styling_approach=styling,
        js_approach=js,
        package_manager=package_manager,
        enable_tunnel=tunnel,
        toml_approach=toml_approach,
        store_url=store_url,
        linting_setup=linting,
        git_hooks=git_hooks,
        shopify_environment=environment,
        theme_id=theme_id,
        store_type=store_type,
        project_description=description,
    )
