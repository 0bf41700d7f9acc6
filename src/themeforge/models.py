"""
themeforge.models - Pydantic Models for Setup Configuration
===========================================================

This module defines the data models used throughout themeforge. The wizard
builds a single ``SetupConfig`` from the user's answers; every setup step
reads it and nothing mutates it afterwards.

Architecture Notes
------------------
The models are organized as:

    SetupConfig (main)
    ├── StylingApproach (enum)
    ├── JsApproach (enum)
    ├── PackageManager (enum)
    ├── TomlApproach (enum)
    ├── LintingSetup (enum)
    └── StoreType (enum)

    ShopifyTheme (one entry of `shopify theme list --json`)

Each enum exposes a ``description`` used as its menu label, in the same
order as the enum members, so a menu index maps straight back to a member.

Usage Example
-------------
>>> from themeforge.models import SetupConfig, PackageManager
>>> config = SetupConfig(project_name="acme-store", package_manager=PackageManager.NPM)
>>> config.package_name
'acme-store-shopify'
>>> config.package_manager.run_command("build")
['npm', 'run', 'build']
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# Constants
# =============================================================================

# vite-plugin-shopify's tunnel option only works up to this Vite release
TUNNEL_VITE_VERSION = "6.0.8"

# Pinned in package.json "packageManager" when bun is selected
BUN_VERSION = "1.3.0"

# pnpm/action-setup needs an explicit version without a "packageManager" field
PNPM_VERSION = "9.15.0"

DEFAULT_ENVIRONMENT = "development"

MYSHOPIFY_SUFFIX = ".myshopify.com"

_ENVIRONMENT_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def normalize_store_url(value: str) -> str:
    """
    Reduce a store URL to a bare ``*.myshopify.com`` domain.

    Examples
    --------
    >>> normalize_store_url("https://acme.myshopify.com/")
    'acme.myshopify.com'
    >>> normalize_store_url("acme")
    'acme.myshopify.com'
    >>> normalize_store_url("")
    ''
    """
    value = re.sub(r"^https?://", "", value.strip()).rstrip("/")
    if value and MYSHOPIFY_SUFFIX not in value:
        value = f"{value}{MYSHOPIFY_SUFFIX}"
    return value


def is_valid_environment(name: str) -> bool:
    """Whether ``name`` can be used as a bare TOML key."""
    return bool(_ENVIRONMENT_PATTERN.match(name))


# =============================================================================
# Enumerations
# =============================================================================

class StylingApproach(str, Enum):
    """
    How the theme's stylesheets are authored.

    Attributes
    ----------
    CSS : str
        Plain CSS with custom properties. The recommended default.

    SCSS : str
        SCSS/SASS, adds `sass` and a Vite preprocessor block.

    POSTCSS : str
        Plain CSS run through PostCSS plugins.

    TAILWIND : str
        Tailwind CSS, adds the tailwindcss PostCSS plugin.
    """

    CSS = "css"
    SCSS = "scss"
    POSTCSS = "postcss"
    TAILWIND = "tailwind"

    @property
    def description(self) -> str:
        """Menu label for the styling prompt."""
        descriptions = {
            StylingApproach.CSS: "Plain CSS (Recommended - simple, semantic, mobile-first)",
            StylingApproach.SCSS: "SCSS/SASS (For variables, mixins, and nesting)",
            StylingApproach.POSTCSS: "PostCSS with plugins (For advanced CSS processing)",
            StylingApproach.TAILWIND: "Tailwind CSS (Utility-first - requires custom configuration)",
        }
        return descriptions[self]


class JsApproach(str, Enum):
    """JavaScript flavour used for the frontend entrypoints."""

    VANILLA = "vanilla"
    TYPESCRIPT = "typescript"

    @property
    def description(self) -> str:
        """Menu label for the JavaScript prompt."""
        descriptions = {
            JsApproach.VANILLA: "Vanilla JavaScript (Recommended - simple, fast, perfect for Shopify)",
            JsApproach.TYPESCRIPT: "TypeScript (For type safety, better IDE support, and larger projects)",
        }
        return descriptions[self]

    @property
    def label(self) -> str:
        return "Vanilla JavaScript" if self is JsApproach.VANILLA else "TypeScript"


class PackageManager(str, Enum):
    """
    JavaScript package managers the wizard can drive.

    Each member knows the command lines for the three operations the
    setup steps need: adding dev dependencies, running a package.json
    script and executing a package binary.

    Examples
    --------
    >>> PackageManager.PNPM.add_dev_command(["vite"])
    ['pnpm', 'add', '-D', 'vite']
    >>> PackageManager.YARN.run_command("build")
    ['yarn', 'build']
    """

    BUN = "bun"
    NPM = "npm"
    PNPM = "pnpm"
    YARN = "yarn"

    @property
    def description(self) -> str:
        """Menu label for the package manager prompt."""
        descriptions = {
            PackageManager.BUN: "Bun (Recommended - 3-10x faster, modern, built-in TypeScript)",
            PackageManager.NPM: "npm (Standard Node.js package manager)",
            PackageManager.PNPM: "pnpm (Efficient disk usage with hard links)",
            PackageManager.YARN: "yarn (Reliable alternative to npm)",
        }
        return descriptions[self]

    def add_dev_command(self, packages: list[str]) -> list[str]:
        """Command line that installs ``packages`` as dev dependencies."""
        prefixes = {
            PackageManager.BUN: ["bun", "add", "-d"],
            PackageManager.NPM: ["npm", "install", "--save-dev"],
            PackageManager.PNPM: ["pnpm", "add", "-D"],
            PackageManager.YARN: ["yarn", "add", "-D"],
        }
        return [*prefixes[self], *packages]

    def run_command(self, script: str) -> list[str]:
        """Command line that runs a package.json script."""
        if self is PackageManager.YARN:
            return ["yarn", script]
        return [self.value, "run", script]

    def run_script(self, script: str) -> str:
        """Shell form of :meth:`run_command`, for docs and package.json."""
        return " ".join(self.run_command(script))

    def exec_command(self, binary: str, *args: str) -> list[str]:
        """Command line that executes a locally installed package binary."""
        prefixes = {
            PackageManager.BUN: ["bunx"],
            PackageManager.NPM: ["npx"],
            PackageManager.PNPM: ["pnpm", "exec"],
            PackageManager.YARN: ["yarn"],
        }
        return [*prefixes[self], binary, *args]

    @property
    def lockfiles(self) -> list[str]:
        """Lockfile names this manager writes."""
        names = {
            PackageManager.BUN: ["bun.lock", "bun.lockb"],
            PackageManager.NPM: ["package-lock.json"],
            PackageManager.PNPM: ["pnpm-lock.yaml"],
            PackageManager.YARN: ["yarn.lock"],
        }
        return names[self]

    @property
    def foreign_lockfiles(self) -> list[str]:
        """Lockfiles of the other managers, ignored so only one is committed."""
        return [
            name
            for manager in PackageManager
            if manager is not self
            for name in manager.lockfiles
        ]

    @property
    def ci_setup_name(self) -> str:
        return "Bun" if self is PackageManager.BUN else "Node.js"

    @property
    def ci_setup_action(self) -> str:
        if self is PackageManager.BUN:
            return "oven-sh/setup-bun@v1"
        return "actions/setup-node@v4"


class TomlApproach(str, Enum):
    """How the Shopify CLI finds the store for theme commands."""

    FILE = "file"
    CLI = "cli"
    SKIP = "skip"

    @property
    def description(self) -> str:
        """Menu label for the store access prompt."""
        descriptions = {
            TomlApproach.FILE: "Create shopify.theme.toml file (Recommended - stores environment configs)",
            TomlApproach.CLI: "Use Shopify CLI login only (No .toml file, authenticate via CLI each time)",
            TomlApproach.SKIP: "Skip for now (Configure manually later)",
        }
        return descriptions[self]

    @property
    def label(self) -> str:
        labels = {
            TomlApproach.FILE: "shopify.theme.toml",
            TomlApproach.CLI: "CLI authentication",
            TomlApproach.SKIP: "Manual setup",
        }
        return labels[self]


class LintingSetup(str, Enum):
    """Code quality tooling written by the linting step."""

    ESLINT_PRETTIER = "eslint-prettier"
    THEME_CHECK = "theme-check"
    SKIP = "skip"

    @property
    def description(self) -> str:
        """Menu label for the linting prompt."""
        descriptions = {
            LintingSetup.ESLINT_PRETTIER: (
                "ESLint + Prettier (Recommended - Full JavaScript/TypeScript linting + formatting)"
            ),
            LintingSetup.THEME_CHECK: "Theme Check only (Shopify Liquid linting)",
            LintingSetup.SKIP: "Skip for now (Configure manually later)",
        }
        return descriptions[self]

    @property
    def label(self) -> str:
        labels = {
            LintingSetup.ESLINT_PRETTIER: "ESLint + Prettier",
            LintingSetup.THEME_CHECK: "Theme Check",
            LintingSetup.SKIP: "None",
        }
        return labels[self]


class StoreType(str, Enum):
    """Kind of storefront, recorded in CLAUDE.md for AI assistants."""

    ECOMMERCE = "e-commerce"
    HEADLESS = "headless"
    B2B = "b2b"
    SUBSCRIPTION = "subscription"
    CUSTOM = "custom"

    @property
    def description(self) -> str:
        """Menu label for the store type prompt."""
        descriptions = {
            StoreType.ECOMMERCE: "E-commerce (Standard online store)",
            StoreType.HEADLESS: "Headless (API-driven, custom frontend)",
            StoreType.B2B: "B2B (Wholesale, bulk ordering)",
            StoreType.SUBSCRIPTION: "Subscription (Recurring products)",
            StoreType.CUSTOM: "Other/Custom",
        }
        return descriptions[self]


# =============================================================================
# Shopify CLI Models
# =============================================================================

class ShopifyTheme(BaseModel):
    """
    A theme as reported by ``shopify theme list --json``.

    The CLI reports numeric ids; they are kept as strings since they are
    only ever passed back to the CLI or written into TOML.
    """

    id: str
    name: str
    role: str = "unpublished"

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: object) -> object:
        if isinstance(v, int):
            return str(v)
        return v

    @property
    def label(self) -> str:
        """Menu label, e.g. ``Dawn (live) - ID: 1234``."""
        return f"{self.name} ({self.role}) - ID: {self.id}"


# =============================================================================
# Main Configuration Model
# =============================================================================

class SetupConfig(BaseModel):
    """
    Every answer the wizard collects.

    Built once by :func:`themeforge.wizard.ask_questions` (or loaded from an
    answers file with :meth:`from_toml`) and read by every setup step.
    Defaults are the recommended menu entries, so an answers file only needs
    ``project_name``.

    Attributes
    ----------
    project_name : str
        Store/project slug. Becomes the npm package name prefix and the
        ``window.<name>`` global in the storefront entrypoint.

    store_url : str
        ``<store>.myshopify.com`` domain, only asked for the TOML file
        approach. Empty means "fill in later".

    shopify_environment : str
        Name of the ``[environments.<name>]`` table in shopify.theme.toml.

    theme_id : str | None
        Id of the base theme to pull, or None when the theme step is skipped.

    Examples
    --------
    >>> config = SetupConfig(project_name="acme-store", store_url="acme")
    >>> config.store_url
    'acme.myshopify.com'
    >>> config.global_name
    'acmestore'
    """

    # -------------------------------------------------------------------------
    # Required Fields
    # -------------------------------------------------------------------------
    project_name: Annotated[str, Field(
        description="Project/store name (e.g. 'acme-store')",
        max_length=100,
    )]

    # -------------------------------------------------------------------------
    # Fields with Defaults
    # -------------------------------------------------------------------------
    styling_approach: StylingApproach = Field(
        default=StylingApproach.CSS,
        description="Stylesheet authoring approach",
    )
    js_approach: JsApproach = Field(
        default=JsApproach.VANILLA,
        description="Vanilla JavaScript or TypeScript",
    )
    package_manager: PackageManager = Field(
        default=PackageManager.BUN,
        description="JavaScript package manager",
    )
    enable_tunnel: bool = Field(
        default=True,
        description="Enable the Cloudflare tunnel for theme editor development",
    )
    toml_approach: TomlApproach = Field(
        default=TomlApproach.FILE,
        description="How store access is configured",
    )
    store_url: str = Field(
        default="",
        description="Shopify store domain",
    )
    linting_setup: LintingSetup = Field(
        default=LintingSetup.ESLINT_PRETTIER,
        description="Linting tooling",
    )
    git_hooks: bool = Field(
        default=True,
        description="Set up husky + lint-staged",
    )
    shopify_environment: str = Field(
        default=DEFAULT_ENVIRONMENT,
        description="Shopify CLI environment name",
    )
    theme_id: str | None = Field(
        default=None,
        description="Base theme id to pull",
    )
    store_type: StoreType = Field(
        default=StoreType.ECOMMERCE,
        description="Kind of store, for CLAUDE.md",
    )
    project_description: str = Field(
        default="",
        description="Free-text project description, for CLAUDE.md",
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------

    @field_validator("project_name")
    @classmethod
    def validate_project_name(cls, v: str) -> str:
        """
        Normalize and validate the project name.

        The name ends up in an npm package name, so it is lowercased and
        limited to letters, digits, hyphens, underscores and dots.

        Raises
        ------
        ValueError
            If the name is empty or contains other characters.
        """
        v = v.strip().lower()

        if not v:
            msg = "Project name is required."
            raise ValueError(msg)

        if not re.match(r"^[a-z0-9][a-z0-9._-]*$", v):
            msg = (
                f"Invalid project name '{v}'. Names must start with a letter or digit "
                "and contain only letters, numbers, hyphens, underscores, and dots."
            )
            raise ValueError(msg)

        return v

    @field_validator("store_url")
    @classmethod
    def normalize_store_url(cls, v: str) -> str:
        """Reduce the store URL to a bare ``*.myshopify.com`` domain."""
        return normalize_store_url(v)

    @field_validator("shopify_environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """The environment name is used as a bare TOML key."""
        v = v.strip() or DEFAULT_ENVIRONMENT
        if not is_valid_environment(v):
            msg = (
                f"Invalid environment name '{v}'. Use only letters, numbers, "
                "hyphens, and underscores."
            )
            raise ValueError(msg)
        return v

    @field_validator("theme_id", mode="before")
    @classmethod
    def normalize_theme_id(cls, v: object) -> object:
        if isinstance(v, int):
            return str(v)
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("project_description")
    @classmethod
    def strip_description(cls, v: str) -> str:
        return v.strip()

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def package_name(self) -> str:
        """Name written to package.json."""
        return f"{self.project_name}-shopify"

    @property
    def global_name(self) -> str:
        """
        Identifier of the ``window.<global_name>`` storefront object.

        Examples
        --------
        >>> SetupConfig(project_name="my-boutique").global_name
        'myboutique'
        """
        return re.sub(r"[-._]", "", self.project_name)

    @property
    def stylesheet_extension(self) -> str:
        return "scss" if self.styling_approach == StylingApproach.SCSS else "css"

    @property
    def script_extension(self) -> str:
        return "ts" if self.js_approach == JsApproach.TYPESCRIPT else "js"

    @property
    def dev_dependencies(self) -> list[str]:
        """
        Packages installed by the dependency step.

        Vite is pinned when the tunnel is enabled since newer releases
        break vite-plugin-shopify's tunnel.
        """
        deps = [
            f"vite@{TUNNEL_VITE_VERSION}" if self.enable_tunnel else "vite",
            "vite-plugin-shopify",
            "postcss",
            "autoprefixer",
            "npm-run-all",
            "@shopify/theme-check-node",
        ]

        if self.styling_approach == StylingApproach.SCSS:
            deps.append("sass")
        elif self.styling_approach == StylingApproach.TAILWIND:
            # v4 moved the PostCSS plugin out of the tailwindcss package
            deps.append("tailwindcss@3")

        if self.js_approach == JsApproach.TYPESCRIPT:
            deps.extend(["typescript", "@types/node"])

        return deps

    @property
    def lint_dependencies(self) -> list[str]:
        """Packages installed for the ESLint + Prettier setup."""
        deps = [
            "eslint",
            "prettier",
            "eslint-config-prettier",
            "eslint-plugin-prettier",
            "@eslint/js",
        ]
        if self.js_approach == JsApproach.TYPESCRIPT:
            deps.extend(["@typescript-eslint/eslint-plugin", "@typescript-eslint/parser"])
        return deps

    @property
    def hook_dependencies(self) -> list[str]:
        return ["husky", "lint-staged"]

    @property
    def theme_toml_name(self) -> str:
        """File written by the theme TOML step."""
        if self.toml_approach == TomlApproach.FILE:
            return "shopify.theme.toml"
        return "example.shopify.theme.toml"

    # -------------------------------------------------------------------------
    # Serialization Methods
    # -------------------------------------------------------------------------

    def to_toml_dict(self) -> dict:
        """
        Convert the config to an answers-file dictionary.

        ``theme_id`` is dropped when unset since TOML has no null.
        """
        data = self.model_dump(mode="json")
        if data["theme_id"] is None:
            del data["theme_id"]
        return data

    @classmethod
    def from_toml(cls, path: Path) -> SetupConfig:
        """
        Load a configuration from a TOML answers file.

        Parameters
        ----------
        path : Path
            Path to the answers file. Keys are the field names of this model.

        Raises
        ------
        FileNotFoundError
            If the file doesn't exist.
        ValidationError
            If the file has invalid values.
        """
        import tomli

        with open(path, "rb") as f:
            data = tomli.load(f)

        return cls(**data)

    def save_toml(self, path: Path) -> None:
        """
        Write the config as an answers file for ``themeforge --answers``.

        Parameters
        ----------
        path : Path
            Destination file. Overwritten if it exists.
        """
        import tomlkit

        doc = tomlkit.document()
        doc.add(tomlkit.comment("themeforge answers"))
        doc.add(tomlkit.comment("Re-run with: themeforge --answers <this file> --yes"))
        doc.add(tomlkit.nl())
        for key, value in self.to_toml_dict().items():
            doc.add(key, value)

        with open(path, "w", encoding="utf-8") as f:
            f.write(tomlkit.dumps(doc))
