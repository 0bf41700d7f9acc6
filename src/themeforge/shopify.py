"""Shopify CLI access: listing the store's themes and pulling one."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError
from rich.console import Console

from themeforge.commands import CommandError, run_command
from themeforge.models import ShopifyTheme


if TYPE_CHECKING:
    from pathlib import Path

    from themeforge.models import SetupConfig


logger = logging.getLogger(__name__)

console = Console()

_THEME_LIST = TypeAdapter(list[ShopifyTheme])


def list_themes(cwd: Path) -> list[ShopifyTheme]:
    """
    Fetch the store's themes with ``shopify theme list --json``.

    Returns an empty list when the CLI is missing, not authenticated or
    prints something that isn't a theme list; the wizard then offers to
    configure the theme later.
    """
    try:
        result = run_command(["shopify", "theme", "list", "--json"], cwd=cwd, capture=True)
        return _THEME_LIST.validate_json(result.stdout)
    except (CommandError, ValidationError) as e:
        logger.debug("theme list failed: %s", e)
        console.print(
            "[red]Error fetching Shopify themes. "
            "Make sure you're authenticated with Shopify CLI.[/]"
        )
        return []


def pull_theme(config: SetupConfig, cwd: Path) -> None:
    """Download the selected base theme into ``cwd``."""
    if config.theme_id is None:
        msg = "no theme selected"
        raise ValueError(msg)

    run_command(
        [
            "shopify", "theme", "pull",
            "--theme", config.theme_id,
            "--environment", config.shopify_environment,
        ],
        cwd=cwd,
    )
