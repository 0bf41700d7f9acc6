"""
themeforge.generator - Setup Steps
==================================

This module turns a :class:`~themeforge.models.SetupConfig` into a working
Shopify theme development environment. It renders templates, writes files
and drives the package manager, Shopify CLI, git and husky.

Architecture
------------
Setup is a fixed sequence of steps (``SETUP_STEPS``) run by
:func:`run_setup`:

     1. package.json
     2. Dependency install
     3. Directory structure
     4. vite.config.js
     5. postcss.config.js (+ tailwind.config.js)
     6. .gitignore
     7. .shopifyignore
     8. GitHub Actions workflow
     9. Entrypoints (+ tsconfig.json)
    10. Core utility scripts
    11. shopify.theme.toml / example.shopify.theme.toml
    12. Linting
    13. Git hooks
    14. Theme pull
    15. Initial build
    16. CLAUDE.md project context
    17. shopify.theme.toml added to .gitignore
    18. Git repository

Steps are best-effort: an exception inside a step is reported with a red
marker, recorded in the result and the next step runs. Nothing is rolled
back. Every step overwrites the files it owns, so running setup again
converges on the same tree.

Template System
---------------
Templates are Jinja2 files in the `templates/` directory. Each template
receives a context dict containing:

    - config: The SetupConfig object
    - themeforge_version: Version of themeforge
    - tunnel_vite_version, pnpm_version: Pinned tool versions

Usage Example
-------------
>>> from pathlib import Path
>>> from themeforge.generator import run_setup
>>> from themeforge.models import SetupConfig
>>>
>>> result = run_setup(SetupConfig(project_name="acme-store"), Path("."))
>>> result.errors
[]
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import TYPE_CHECKING

import tomlkit
from jinja2 import Environment, PackageLoader, select_autoescape
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from themeforge import __version__
from themeforge.commands import CommandError, command_succeeds, run_command
from themeforge.models import (
    BUN_VERSION,
    PNPM_VERSION,
    TUNNEL_VITE_VERSION,
    JsApproach,
    LintingSetup,
    PackageManager,
    SetupConfig,
    StylingApproach,
    TomlApproach,
)
from themeforge.shopify import pull_theme
from themeforge.wizard import header


if TYPE_CHECKING:
    from collections.abc import Callable


logger = logging.getLogger(__name__)


# =============================================================================
# Module-Level Configuration
# =============================================================================

# Console for rich output
console = Console()

DIRECTORIES = [
    "frontend/entrypoints",
    "frontend/scripts/components",
    "frontend/scripts/sections",
    "frontend/scripts/hooks/core",
    "frontend/styles",
    "frontend/images",
    "frontend/fonts",
    ".github/workflows",
]

# Directories that start empty and still need to be committed
GITKEEP_DIRECTORIES = [
    "frontend/scripts/sections",
    "frontend/styles",
    "frontend/images",
    "frontend/fonts",
]

WORKFLOW_PATH = Path(".github/workflows/build.yml")

THEME_TOML = "shopify.theme.toml"

# .gitignore block the theme TOML entry is inserted into
GITIGNORE_ANCHOR = "# Shopify theme files\nconfig/settings_data.json"

CLAUDE_CONTEXT_MARKER = "## Project-Specific Context"

INITIAL_COMMIT_MESSAGE = "Initial commit: Shopify theme setup"


# =============================================================================
# Result and Context
# =============================================================================


@dataclass
class SetupResult:
    """
    Outcome of a setup run.

    Attributes
    ----------
    root : Path
        Directory that was set up.

    files_created : list[Path]
        Every file written, in order.

    completed_steps : list[str]
        Titles of steps that ran without raising.

    skipped_steps : list[str]
        Titles of steps whose condition did not apply.

    warnings : list[str]
        Non-fatal problems inside otherwise successful steps, plus
        validation issues.

    errors : list[str]
        One entry per failed step.

    validation_passed : bool
        Whether post-setup validation found no issues.
    """

    root: Path
    files_created: list[Path] = field(default_factory=list)
    completed_steps: list[str] = field(default_factory=list)
    skipped_steps: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    validation_passed: bool = False

    @property
    def success(self) -> bool:
        """True when no step failed."""
        return not self.errors


@dataclass
class SetupContext:
    """Everything a step needs: the answers, the target directory and output."""

    config: SetupConfig
    root: Path
    console: Console = field(default_factory=lambda: console)
    result: SetupResult | None = None

    def __post_init__(self) -> None:
        if self.result is None:
            self.result = SetupResult(root=self.root)

    @cached_property
    def env(self) -> Environment:
        return create_jinja_env()

    @property
    def pm(self) -> PackageManager:
        return self.config.package_manager

    def render(self, template_name: str, **extra: object) -> str:
        return render_template(self.env, template_name, self.config, **extra)

    def write(self, relative_path: str | Path, content: str) -> Path:
        """Write a file under the root, creating parent directories."""
        full_path = self.root / relative_path
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(content, encoding="utf-8")
        self.result.files_created.append(full_path)
        self.console.print(f"[green]✓ {escape(str(relative_path))} created[/]")
        return full_path

    def run(self, argv: list[str]) -> None:
        run_command(argv, cwd=self.root)

    def warn(self, message: str) -> None:
        self.result.warnings.append(message)
        self.console.print(f"[yellow]⚠ {escape(message)}[/]")


# =============================================================================
# Template Engine Setup
# =============================================================================


def toml_string(value: object) -> str:
    """Quote ``value`` as a TOML basic string, escaping quotes and control characters."""
    return tomlkit.string(str(value)).as_string()


def create_jinja_env() -> Environment:
    """
    Create and configure the Jinja2 template environment.

    Autoescaping is disabled since the output is JavaScript, CSS, YAML,
    TOML and Markdown, never HTML.
    """
    env = Environment(
        loader=PackageLoader("themeforge", "templates"),
        autoescape=select_autoescape([]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["toml_string"] = toml_string
    return env


def render_template(
    env: Environment,
    template_name: str,
    config: SetupConfig,
    **extra: object,
) -> str:
    """
    Render a single template with the setup configuration.

    Parameters
    ----------
    env : Environment
        The Jinja2 environment to use for rendering.

    template_name : str
        Name of the template file (e.g., "vite.config.js.j2").

    config : SetupConfig
        Setup configuration passed to the template as ``config``.

    **extra
        Additional template variables.

    Raises
    ------
    jinja2.TemplateNotFound
        If the template file doesn't exist.
    """
    template = env.get_template(template_name)

    context = {
        "config": config,
        "themeforge_version": __version__,
        "tunnel_vite_version": TUNNEL_VITE_VERSION,
        "pnpm_version": PNPM_VERSION,
        **extra,
    }

    return template.render(**context)


# =============================================================================
# package.json
# =============================================================================


def build_package_json(config: SetupConfig) -> dict:
    """
    Build the package.json document.

    ``dev`` runs the Shopify theme server and Vite side by side; ``deploy``
    builds then pushes. Each has staging and production variants matching
    the environments in shopify.theme.toml.
    """
    pm = config.package_manager

    package: dict = {
        "name": config.package_name,
        "version": "1.0.0",
        "private": True,
        "type": "module",
    }
    if pm is PackageManager.BUN:
        package["packageManager"] = f"bun@{BUN_VERSION}"

    package["scripts"] = {
        "dev": 'run-p -sr "shopify:dev -- {@}" "vite:dev" --',
        "dev:staging": 'run-p -sr "shopify:dev:staging -- {@}" "vite:dev" --',
        "dev:production": 'run-p -sr "shopify:dev:production -- {@}" "vite:dev" --',
        "build": pm.run_script("vite:build"),
        "preview": "vite preview",
        "deploy": 'run-s "vite:build" "shopify:push -- {@}" --',
        "deploy:staging": 'run-s "vite:build" "shopify:push:staging -- {@}" --',
        "deploy:production": 'run-s "vite:build" "shopify:push:production -- {@}" --',
        "shopify:dev": f"shopify theme dev --environment {config.shopify_environment}",
        "shopify:dev:staging": "shopify theme dev --environment staging",
        "shopify:dev:production": "shopify theme dev --environment production",
        "shopify:push": f"shopify theme push --environment {config.shopify_environment}",
        "shopify:push:staging": "shopify theme push --environment staging",
        "shopify:push:production": "shopify theme push --environment production",
        "vite:dev": "vite",
        "vite:build": "vite build",
        "clean": "rm -rf dist assets/storefront.js assets/custom_styling.css",
    }

    return package


def dump_json(data: dict) -> str:
    return json.dumps(data, indent=2) + "\n"


def create_package_json(ctx: SetupContext) -> None:
    ctx.write("package.json", dump_json(build_package_json(ctx.config)))


def add_package_scripts(root: Path, scripts: dict[str, str]) -> None:
    """
    Merge ``scripts`` into an existing package.json.

    Raises
    ------
    FileNotFoundError
        If package.json doesn't exist.
    ValueError
        If package.json isn't a JSON object.
    """
    path = root / "package.json"
    package = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(package, dict):
        msg = "package.json is not a JSON object"
        raise ValueError(msg)

    package.setdefault("scripts", {}).update(scripts)
    path.write_text(dump_json(package), encoding="utf-8")


# =============================================================================
# Dependencies and Build
# =============================================================================


def install_dependencies(ctx: SetupContext) -> None:
    deps = ctx.config.dev_dependencies

    ctx.console.print(f"[cyan]Installing dependencies with {ctx.pm.value}...[/]")
    if ctx.config.enable_tunnel:
        ctx.console.print(
            f"[yellow]  ⚡ Installing Vite {TUNNEL_VITE_VERSION} "
            "(required for tunnel compatibility)[/]"
        )

    ctx.run(ctx.pm.add_dev_command(deps))
    ctx.console.print("[green]✓ Dependencies installed successfully[/]")


def run_initial_build(ctx: SetupContext) -> None:
    ctx.console.print("[cyan]Building Vite assets for the first time...[/]")
    ctx.run(ctx.pm.run_command("build"))
    ctx.console.print("[green]✓ Initial build completed successfully[/]")


# =============================================================================
# Directory Structure and Static Configuration
# =============================================================================


def create_directory_structure(ctx: SetupContext) -> None:
    for directory in DIRECTORIES:
        (ctx.root / directory).mkdir(parents=True, exist_ok=True)
        ctx.console.print(f"[green]✓ Created: {directory}[/]")

    for directory in GITKEEP_DIRECTORIES:
        gitkeep = ctx.root / directory / ".gitkeep"
        gitkeep.touch()
        ctx.result.files_created.append(gitkeep)


def create_vite_config(ctx: SetupContext) -> None:
    ctx.write("vite.config.js", ctx.render("vite.config.js.j2"))
    if ctx.config.enable_tunnel:
        ctx.console.print(
            f"[green]✓ Vite version will be locked to {TUNNEL_VITE_VERSION} "
            "for tunnel compatibility[/]"
        )


def create_postcss_config(ctx: SetupContext) -> None:
    ctx.write("postcss.config.js", ctx.render("postcss.config.js.j2"))
    if ctx.config.styling_approach == StylingApproach.TAILWIND:
        ctx.write("tailwind.config.js", ctx.render("tailwind.config.js.j2"))


def create_gitignore(ctx: SetupContext) -> None:
    ctx.write(".gitignore", ctx.render("gitignore.j2"))


def create_shopifyignore(ctx: SetupContext) -> None:
    ctx.write(".shopifyignore", ctx.render("shopifyignore.j2"))


def create_github_workflow(ctx: SetupContext) -> None:
    ctx.write(WORKFLOW_PATH, ctx.render("github_build.yml.j2"))


# =============================================================================
# Frontend Sources
# =============================================================================


def create_entrypoints(ctx: SetupContext) -> None:
    config = ctx.config

    ctx.write(
        f"frontend/entrypoints/storefront.{config.script_extension}",
        ctx.render("storefront.js.j2"),
    )

    ext = config.stylesheet_extension
    ctx.write(
        f"frontend/entrypoints/custom_styling.{ext}",
        ctx.render(f"custom_styling.{ext}.j2"),
    )
    if ext == "scss":
        ctx.console.print("[green]  ✓ SCSS tokens and mixins configured[/]")
    else:
        ctx.console.print("[green]  ✓ Centralized media query guide added[/]")

    if config.js_approach == JsApproach.TYPESCRIPT:
        ctx.write("tsconfig.json", ctx.render("tsconfig.json.j2"))


def create_core_files(ctx: SetupContext) -> None:
    ctx.write("frontend/scripts/utils.js", ctx.render("utils.js.j2"))
    ctx.write(
        "frontend/scripts/hooks/core/sectionRegistry.js",
        ctx.render("sectionRegistry.js.j2"),
    )


# =============================================================================
# Shopify Theme TOML
# =============================================================================


def create_theme_toml(ctx: SetupContext) -> None:
    """
    Write shopify.theme.toml, or only an example for the CLI/skip approaches.

    Missing store URL and theme id are written as placeholders so the file
    is valid TOML the user can fill in.
    """
    config = ctx.config

    if config.toml_approach != TomlApproach.FILE:
        ctx.write(config.theme_toml_name, ctx.render("example.shopify.theme.toml.j2"))
        if config.toml_approach == TomlApproach.CLI:
            ctx.console.print(
                "[yellow]  Using CLI authentication - run 'shopify auth login' "
                "before development[/]"
            )
        else:
            ctx.console.print("[yellow]  Copy this to shopify.theme.toml when ready to configure[/]")
        return

    store_url = config.store_url or "your-store.myshopify.com"
    theme_id = config.theme_id or "your-theme-id"
    extra_environments = [
        (name, placeholder)
        for name, placeholder in (("staging", "staging-theme-id"), ("production", "live-theme-id"))
        if name != config.shopify_environment
    ]

    ctx.write(
        THEME_TOML,
        ctx.render(
            "shopify.theme.toml.j2",
            store_url=store_url,
            theme_id=theme_id,
            extra_environments=extra_environments,
        ),
    )
    ctx.console.print(f"[cyan]  Store: {escape(store_url)}[/]")
    ctx.console.print(f"[cyan]  Theme: {escape(theme_id)}[/]")
    ctx.console.print(f"[cyan]  Environment: {config.shopify_environment}[/]")


# =============================================================================
# Linting and Git Hooks
# =============================================================================


def setup_linting(ctx: SetupContext) -> None:
    """
    Install and configure the chosen linters.

    For ESLint + Prettier the config files are only written once the
    packages installed; a failed install fails the step.
    """
    config = ctx.config

    if config.linting_setup == LintingSetup.ESLINT_PRETTIER:
        ctx.console.print("[cyan]Installing ESLint and Prettier...[/]")
        ctx.run(ctx.pm.add_dev_command(config.lint_dependencies))
        ctx.console.print("[green]✓ Linting dependencies installed[/]")

        ctx.write("eslint.config.js", ctx.render("eslint.config.js.j2"))
        ctx.write(".prettierrc", ctx.render("prettierrc.j2"))
        ctx.write(".prettierignore", ctx.render("prettierignore.j2"))

    elif config.linting_setup == LintingSetup.THEME_CHECK:
        ctx.console.print(
            "[green]Theme Check is already included via @shopify/theme-check-node[/]"
        )
        ctx.write(".theme-check.yml", ctx.render("theme-check.yml.j2"))


def lint_scripts(config: SetupConfig) -> dict[str, str]:
    """package.json scripts added alongside the git hooks."""
    if config.linting_setup == LintingSetup.ESLINT_PRETTIER:
        lint, lint_fix = "eslint frontend/", "eslint frontend/ --fix"
    else:
        lint, lint_fix = "shopify theme check", "shopify theme check --auto-correct"

    return {
        "lint": lint,
        "lint:fix": lint_fix,
        "format": "prettier --write frontend/",
        "prepare": "husky",
    }


def is_git_repository(root: Path) -> bool:
    return command_succeeds(["git", "rev-parse", "--git-dir"], cwd=root)


def setup_git_hooks(ctx: SetupContext) -> None:
    """
    Install husky + lint-staged and write the pre-commit hook.

    Only the dependency install is fatal to the step. husky needs a git
    repository, so one is initialized here when missing; the commit
    happens later in the git step.
    """
    config = ctx.config

    ctx.console.print("[cyan]Installing husky and lint-staged...[/]")
    ctx.run(ctx.pm.add_dev_command(config.hook_dependencies))
    ctx.console.print("[green]✓ Git hooks dependencies installed[/]")

    try:
        if not is_git_repository(ctx.root):
            ctx.run(["git", "init"])
        ctx.run(ctx.pm.exec_command("husky", "init"))
        ctx.console.print("[green]✓ Husky initialized[/]")
    except CommandError as e:
        ctx.warn(f"Husky init skipped: {e}")

    try:
        hook = ctx.write(
            ".husky/pre-commit",
            ctx.render(
                "pre-commit.j2",
                exec_lint_staged=" ".join(ctx.pm.exec_command("lint-staged")),
            ),
        )
        hook.chmod(0o755)
    except OSError as e:
        ctx.warn(f"Pre-commit hook creation skipped: {e}")

    if config.linting_setup == LintingSetup.ESLINT_PRETTIER:
        ctx.write(".lintstagedrc", ctx.render("lintstagedrc.j2"))

    ctx.console.print("[cyan]  Adding lint scripts to package.json...[/]")
    try:
        add_package_scripts(ctx.root, lint_scripts(config))
        ctx.console.print("[green]✓ Lint scripts added to package.json[/]")
    except (OSError, ValueError) as e:
        ctx.warn(f"Could not update package.json scripts: {e}")


# =============================================================================
# Shopify Theme Pull
# =============================================================================


def pull_shopify_theme(ctx: SetupContext) -> None:
    config = ctx.config
    ctx.console.print(
        f"[cyan]Pulling theme {escape(str(config.theme_id))} to "
        f"{config.shopify_environment} environment...[/]"
    )
    pull_theme(config, ctx.root)
    ctx.console.print("[green]✓ Theme pulled successfully[/]")


# =============================================================================
# CLAUDE.md
# =============================================================================


def merge_claude_context(existing: str, context: str) -> str:
    """
    Append the generated context section, replacing an earlier one.

    The section starts with a horizontal rule; everything from that rule
    onwards is treated as generated.
    """
    marker_at = existing.find(CLAUDE_CONTEXT_MARKER)
    if marker_at != -1:
        rule_at = existing.rfind("---", 0, marker_at)
        cut = rule_at if rule_at != -1 else marker_at
        existing = existing[:cut]

    return existing.rstrip("\n") + context


def update_claude_md(ctx: SetupContext) -> None:
    path = ctx.root / "CLAUDE.md"

    if path.exists():
        existing = path.read_text(encoding="utf-8")
    else:
        existing = ctx.render("CLAUDE.md.j2")

    content = merge_claude_context(existing, ctx.render("claude_context.md.j2"))
    path.write_text(content, encoding="utf-8")
    ctx.result.files_created.append(path)
    ctx.console.print("[green]✓ CLAUDE.md updated with project-specific context[/]")


# =============================================================================
# Git
# =============================================================================


def ignore_theme_toml(gitignore: str) -> str:
    """
    Return ``gitignore`` with shopify.theme.toml listed exactly once.

    The entry goes under the "# Shopify theme files" block when present,
    otherwise into a new block at the end.
    """
    if THEME_TOML in (line.strip() for line in gitignore.splitlines()):
        return gitignore

    if GITIGNORE_ANCHOR in gitignore:
        return gitignore.replace(GITIGNORE_ANCHOR, f"{GITIGNORE_ANCHOR}\n{THEME_TOML}", 1)

    return gitignore.rstrip("\n") + f"\n\n# Shopify CLI credentials\n{THEME_TOML}\n"


def secure_theme_toml(ctx: SetupContext) -> None:
    path = ctx.root / ".gitignore"
    content = path.read_text(encoding="utf-8")
    updated = ignore_theme_toml(content)

    if updated == content:
        ctx.console.print(f"[green]✓ {THEME_TOML} already in .gitignore[/]")
        return

    path.write_text(updated, encoding="utf-8")
    ctx.console.print(f"[green]✓ {THEME_TOML} added to .gitignore[/]")
    ctx.console.print("[cyan]  Your store credentials are now protected from being committed[/]")


def initialize_git(ctx: SetupContext) -> None:
    """
    Create the repository and the initial commit.

    A repository that already has commits is left alone. One that was
    only initialized (by the git hooks step) still gets the initial commit.
    """
    if is_git_repository(ctx.root):
        if command_succeeds(["git", "rev-parse", "--verify", "HEAD"], cwd=ctx.root):
            ctx.console.print("[yellow]Git repository already initialized[/]")
            return
    else:
        ctx.run(["git", "init"])

    ctx.run(["git", "add", "."])
    ctx.run(["git", "commit", "-m", INITIAL_COMMIT_MESSAGE])
    ctx.console.print("[green]✓ Git repository initialized[/]")


# =============================================================================
# Step Table
# =============================================================================


@dataclass(frozen=True)
class SetupStep:
    """
    One entry of the setup sequence.

    ``condition`` decides whether the step applies to a configuration; when
    it returns False ``skip_message`` is printed instead of running it.
    """

    title: str
    run: Callable[[SetupContext], None]
    condition: Callable[[SetupConfig], bool] | None = None
    skip_message: str = ""

    def applies(self, config: SetupConfig) -> bool:
        return self.condition is None or self.condition(config)


SETUP_STEPS: list[SetupStep] = [
    SetupStep("Creating package.json", create_package_json),
    SetupStep("Installing Dependencies", install_dependencies),
    SetupStep("Creating Directory Structure", create_directory_structure),
    SetupStep("Creating Vite Configuration", create_vite_config),
    SetupStep("Creating PostCSS Configuration", create_postcss_config),
    SetupStep("Creating .gitignore", create_gitignore),
    SetupStep("Creating .shopifyignore", create_shopifyignore),
    SetupStep("Creating GitHub Actions Workflow", create_github_workflow),
    SetupStep("Creating Entry Point Files", create_entrypoints),
    SetupStep("Creating Core Utility Files", create_core_files),
    SetupStep("Creating Shopify Theme Configuration", create_theme_toml),
    SetupStep(
        "Setting Up Linting",
        setup_linting,
        lambda c: c.linting_setup != LintingSetup.SKIP,
        "Skipping linting setup",
    ),
    SetupStep(
        "Setting Up Git Hooks",
        setup_git_hooks,
        lambda c: c.git_hooks,
        "Skipping Git hooks setup",
    ),
    SetupStep(
        "Pulling Shopify Theme",
        pull_shopify_theme,
        lambda c: c.theme_id is not None,
        "Skipping theme pull - no theme selected",
    ),
    SetupStep("Running Initial Build", run_initial_build),
    SetupStep("Updating CLAUDE.md with Project Context", update_claude_md),
    # Before the git step so the initial commit never contains credentials
    SetupStep("Securing shopify.theme.toml", secure_theme_toml),
    SetupStep("Initializing Git Repository", initialize_git),
]


# =============================================================================
# Post-Setup Validation
# =============================================================================


def validate_setup(config: SetupConfig, root: Path) -> tuple[bool, list[str]]:
    """
    Check that the generated environment is usable.

    Returns
    -------
    tuple[bool, list[str]]
        ``(success, issues)``.

    Checks Performed
    ----------------
    1. Essential files exist
    2. package.json is a JSON object with scripts
    3. The theme TOML parses
    4. .gitignore lists shopify.theme.toml
    """
    import tomli

    issues: list[str] = []

    essential_files = [
        Path("package.json"),
        Path("vite.config.js"),
        Path("postcss.config.js"),
        Path(".gitignore"),
        Path(".shopifyignore"),
        WORKFLOW_PATH,
        Path(f"frontend/entrypoints/storefront.{config.script_extension}"),
        Path(f"frontend/entrypoints/custom_styling.{config.stylesheet_extension}"),
        Path(config.theme_toml_name),
    ]

    for file_path in essential_files:
        if not (root / file_path).exists():
            issues.append(f"Missing essential file: {file_path}")

    package_path = root / "package.json"
    if package_path.exists():
        try:
            package = json.loads(package_path.read_text(encoding="utf-8"))
            if not isinstance(package, dict) or "scripts" not in package:
                issues.append("package.json has no scripts section")
        except json.JSONDecodeError as e:
            issues.append(f"Invalid package.json: {e}")

    toml_path = root / config.theme_toml_name
    if toml_path.exists():
        try:
            with toml_path.open("rb") as f:
                tomli.load(f)
        except tomli.TOMLDecodeError as e:
            issues.append(f"Invalid {config.theme_toml_name}: {e}")

    gitignore_path = root / ".gitignore"
    if gitignore_path.exists():
        lines = gitignore_path.read_text(encoding="utf-8").splitlines()
        if THEME_TOML not in (line.strip() for line in lines):
            issues.append(f"{THEME_TOML} is not listed in .gitignore")

    return len(issues) == 0, issues


# =============================================================================
# Main Setup Function
# =============================================================================


def display_next_steps(config: SetupConfig, out: Console) -> None:
    """Print the closing panel with the commands to run next."""
    pm = config.package_manager
    lines = ["[bold green]Your Shopify theme development environment is ready![/]", ""]

    if config.enable_tunnel:
        lines += [
            "[yellow]⚠️  IMPORTANT: Install cloudflared for tunnel support:[/]",
            "   brew install cloudflared",
            "",
        ]

    lines += [
        "[bold]1. Start the development server:[/]",
        f"   {pm.run_script('dev')}",
    ]
    if config.enable_tunnel:
        lines.append("   [dim](This will create a Cloudflare tunnel for theme editor testing)[/]")

    lines += [
        "",
        "[bold]2. Build for production:[/]",
        f"   {pm.run_script('build')}",
        "",
        "[bold]3. Deploy to Shopify:[/]",
        f"   {pm.run_script('deploy')}",
        "",
        "[bold]4. Read the documentation:[/]",
        "   - CLAUDE.md for project guidelines and AI assistant rules",
        "   - README.md for comprehensive documentation",
        "",
        "[bold]5. Commit your changes:[/]",
        "   git add .",
        f'   git commit -m "feat: Initial Shopify theme setup for {config.project_name}"',
        "   git push",
    ]

    out.print()
    out.print(
        Panel(
            "\n".join(lines),
            title="[bold green]Setup Complete![/]",
            border_style="green",
        )
    )
    out.print("[bold green]Happy coding! 🚀[/]")


def run_setup(
    config: SetupConfig,
    root: Path,
    *,
    steps: list[SetupStep] | None = None,
    verbose: bool = True,
    validate: bool = True,
) -> SetupResult:
    """
    Run every setup step against ``root``.

    Parameters
    ----------
    config : SetupConfig
        The wizard's answers.

    root : Path
        Directory to set up. Created if missing.

    steps : list[SetupStep] | None
        Steps to run, defaulting to ``SETUP_STEPS``.

    verbose : bool, default=True
        If False, nothing is printed.

    validate : bool, default=True
        If True, run :func:`validate_setup` after the steps.

    Returns
    -------
    SetupResult
        What was written, what failed and what was skipped. Step failures
        are recorded here instead of raised.
    """
    out = console if verbose else Console(quiet=True)
    root.mkdir(parents=True, exist_ok=True)
    ctx = SetupContext(config=config, root=root, console=out)
    result = ctx.result

    for step in steps if steps is not None else SETUP_STEPS:
        if not step.applies(config):
            out.print(f"\n[yellow]{step.skip_message}[/]")
            result.skipped_steps.append(step.title)
            continue

        header(out, step.title)
        try:
            step.run(ctx)
        except Exception as e:
            logger.debug("step %r failed", step.title, exc_info=True)
            result.errors.append(f"{step.title}: {e}")
            out.print(f"[red]✗ {escape(step.title)} failed: {escape(str(e))}[/]")
        else:
            result.completed_steps.append(step.title)

    if validate:
        header(out, "Validating Setup")
        result.validation_passed, issues = validate_setup(config, root)
        if result.validation_passed:
            out.print("[green]✓ All validations passed[/]")
        else:
            result.warnings.extend(issues)
            for issue in issues:
                out.print(f"[yellow]⚠ {escape(issue)}[/]")

    if verbose:
        display_next_steps(config, out)

    return result
