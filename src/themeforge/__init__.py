"""
themeforge - Shopify Theme Environment Bootstrapper
===================================================

An interactive setup wizard that prepares a Shopify theme repository for
modern front-end development: Vite, a JavaScript package manager, CI/CD,
linting, git hooks and an AI assistant context file.

Features
--------
- **Guided Setup**: Numbered menus walk through every choice
- **Vite Ready**: vite-plugin-shopify configuration with optional Cloudflare tunnel
- **Any Package Manager**: bun, npm, pnpm or yarn
- **CI/CD Ready**: GitHub Actions build workflow included
- **Code Quality**: ESLint + Prettier or Theme Check, husky + lint-staged hooks

Quick Start
-----------
```bash
# Install themeforge
pip install themeforge

# Run the wizard inside your theme directory
cd my-theme
themeforge

# Or replay saved answers
themeforge --answers answers.toml --yes
```

Architecture
------------
The package is organized into these main modules:

- ``cli``: Typer-based command line interface
- ``wizard``: The question sequence that builds a SetupConfig
- ``prompts``: Numbered and arrow-key prompt backends
- ``generator``: The setup steps and template rendering
- ``commands``: Subprocess invocation with logging
- ``shopify``: Shopify CLI theme listing and pulling
- ``templates``: Jinja2 templates for generated files
- ``models``: Pydantic models for configuration

License
-------
MIT License - see LICENSE file for details.
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"
__license__ = "MIT"

# =============================================================================
# Public API Exports
# =============================================================================
# These are the main functions/classes users should interact with when using
# themeforge as a library (as opposed to the CLI)

from themeforge.generator import run_setup
from themeforge.models import SetupConfig


__all__ = [
    # Configuration models
    "SetupConfig",
    # Version info
    "__version__",
    # Core functions
    "run_setup",
]
