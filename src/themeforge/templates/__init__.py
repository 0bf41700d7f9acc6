"""
themeforge.templates - Jinja2 Template Files
============================================

This package contains the Jinja2 templates rendered by the setup steps in
``themeforge.generator``. Templates use the .j2 extension.

Template Naming Convention
--------------------------
- Templates end with `.j2` extension
- Output filename = template name without `.j2`, except where the output
  is a dotfile or lives in a subdirectory (`gitignore.j2` → `.gitignore`,
  `github_build.yml.j2` → `.github/workflows/build.yml`); the generator's
  step functions own that mapping

Available Templates
-------------------
Build tooling:
    - vite.config.js.j2, postcss.config.js.j2, tailwind.config.js.j2
    - tsconfig.json.j2

Ignore files:
    - gitignore.j2, shopifyignore.j2, prettierignore.j2

CI:
    - github_build.yml.j2: GitHub Actions build workflow

Frontend stubs:
    - storefront.js.j2: Entrypoint (rendered as .js or .ts)
    - custom_styling.css.j2 / custom_styling.scss.j2
    - utils.js.j2, sectionRegistry.js.j2

Shopify CLI:
    - shopify.theme.toml.j2, example.shopify.theme.toml.j2

Linting and hooks:
    - eslint.config.js.j2, prettierrc.j2, theme-check.yml.j2
    - pre-commit.j2, lintstagedrc.j2

AI assistant context:
    - CLAUDE.md.j2: Base file when the theme has none
    - claude_context.md.j2: Project-specific section appended to it

Template Context
----------------
All templates receive:

    config : SetupConfig
        The wizard's answers

    themeforge_version : str
        Version of themeforge

    tunnel_vite_version, pnpm_version : str
        Pinned tool versions for package.json and the CI workflow

Some steps pass extra variables (for example the store URL placeholder for
shopify.theme.toml); see the step functions in ``generator``.
"""

# Templates are loaded dynamically by Jinja2's PackageLoader.
