"""
Tests for themeforge.generator
==============================

This module contains tests for the setup steps. External commands go
through the ``fake_run`` fixture, so no package manager, Shopify CLI or
git is needed.

Test Organization
-----------------
- TestTemplateRendering: Tests for Jinja2 template rendering
- TestPackageJson: Tests for package.json generation
- TestDirectoryStructure: Tests for directory creation
- TestConfigFiles: Tests for Vite, PostCSS and ignore files
- TestEntrypoints: Tests for frontend entrypoints
- TestThemeToml: Tests for shopify.theme.toml
- TestLinting: Tests for the linting step
- TestGitHooks: Tests for husky and lint-staged
- TestClaudeMd: Tests for the CLAUDE.md context section
- TestSecureThemeToml: Tests for the .gitignore entry
- TestInitializeGit: Tests for the git step
- TestValidateSetup: Tests for post-setup validation
- TestRunSetup: End-to-end setup tests
"""

import json
import os
import pytest
import tomli
from pathlib import Path

from rich.console import Console

from themeforge import __version__
from themeforge.generator import (
    SETUP_STEPS,
    SetupContext,
    add_package_scripts,
    build_package_json,
    create_directory_structure,
    create_entrypoints,
    create_github_workflow,
    create_gitignore,
    create_jinja_env,
    create_package_json,
    create_postcss_config,
    create_theme_toml,
    create_vite_config,
    ignore_theme_toml,
    initialize_git,
    merge_claude_context,
    render_template,
    run_setup,
    setup_git_hooks,
    setup_linting,
    update_claude_md,
    validate_setup,
)
from themeforge.models import (
    JsApproach,
    LintingSetup,
    PackageManager,
    SetupConfig,
    StylingApproach,
    TomlApproach,
)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def make_context(theme_dir: Path):
    """Build a SetupContext for ``theme_dir`` with a silent console."""
    def _make(**overrides) -> SetupContext:
        config = SetupConfig(project_name="acme-store", **overrides)
        return SetupContext(config=config, root=theme_dir, console=Console(quiet=True))
    return _make


@pytest.fixture
def ctx(make_context) -> SetupContext:
    """A context with the recommended answers."""
    return make_context()


def read(root: Path, name: str) -> str:
    return (root / name).read_text(encoding="utf-8")


# =============================================================================
# Template Rendering Tests
# =============================================================================

CONFIG_VARIANTS = [
    {},
    {"styling_approach": StylingApproach.SCSS, "js_approach": JsApproach.TYPESCRIPT},
    {"styling_approach": StylingApproach.TAILWIND, "package_manager": PackageManager.YARN},
    {"enable_tunnel": False, "linting_setup": LintingSetup.THEME_CHECK, "package_manager": PackageManager.PNPM},
]


class TestTemplateRendering:
    """Tests for Jinja2 template rendering."""

    def test_templates_found(self) -> None:
        """Test that the packaged templates are discoverable."""
        names = create_jinja_env().list_templates(extensions=["j2"])

        assert "vite.config.js.j2" in names
        assert "gitignore.j2" in names
        assert "claude_context.md.j2" in names

    @pytest.mark.parametrize("overrides", CONFIG_VARIANTS)
    def test_all_templates_render(self, overrides: dict) -> None:
        """Test that every template renders for a range of answers."""
        env = create_jinja_env()
        config = SetupConfig(project_name="acme-store", **overrides)

        for name in env.list_templates(extensions=["j2"]):
            content = render_template(env, name, config)
            assert isinstance(content, str)
            assert "{{" not in content.replace("{{amount}}", "")

    def test_project_name_in_context(self) -> None:
        """Test that the config is available to templates."""
        env = create_jinja_env()
        content = render_template(env, "utils.js.j2", SetupConfig(project_name="my-boutique"))

        assert "window.myboutique" in content


# =============================================================================
# package.json Tests
# =============================================================================

class TestPackageJson:
    """Tests for package.json generation."""

    def test_bun_package(self) -> None:
        """Test the recommended package.json."""
        package = build_package_json(SetupConfig(project_name="acme-store"))

        assert package["name"] == "acme-store-shopify"
        assert package["version"] == "1.0.0"
        assert package["private"] is True
        assert package["type"] == "module"
        assert package["packageManager"] == "bun@1.3.0"
        assert package["scripts"]["build"] == "bun run vite:build"
        assert package["scripts"]["vite:build"] == "vite build"

    def test_package_manager_only_for_bun(self) -> None:
        """Test that other managers don't get a packageManager field."""
        package = build_package_json(
            SetupConfig(project_name="acme", package_manager=PackageManager.NPM)
        )

        assert "packageManager" not in package
        assert package["scripts"]["build"] == "npm run vite:build"

    def test_yarn_build_script(self) -> None:
        """Test that yarn runs scripts without 'run'."""
        package = build_package_json(
            SetupConfig(project_name="acme", package_manager=PackageManager.YARN)
        )

        assert package["scripts"]["build"] == "yarn vite:build"

    def test_dev_and_deploy_scripts(self) -> None:
        """Test that dev and deploy target the chosen environment."""
        package = build_package_json(
            SetupConfig(project_name="acme", shopify_environment="qa")
        )
        scripts = package["scripts"]

        assert scripts["dev"] == 'run-p -sr "shopify:dev -- {@}" "vite:dev" --'
        assert scripts["shopify:dev"] == "shopify theme dev --environment qa"
        assert scripts["shopify:push"] == "shopify theme push --environment qa"
        assert scripts["deploy:staging"].startswith('run-s "vite:build"')
        assert "clean" in scripts

    def test_written_as_json(self, ctx: SetupContext) -> None:
        """Test that package.json is indented JSON with a trailing newline."""
        create_package_json(ctx)
        content = read(ctx.root, "package.json")

        assert content.endswith("}\n")
        assert json.loads(content)["name"] == "acme-store-shopify"
        assert ctx.root / "package.json" in ctx.result.files_created

    def test_add_package_scripts(self, ctx: SetupContext) -> None:
        """Test merging scripts into an existing package.json."""
        create_package_json(ctx)
        add_package_scripts(ctx.root, {"lint": "eslint frontend/"})
        scripts = json.loads(read(ctx.root, "package.json"))["scripts"]

        assert scripts["lint"] == "eslint frontend/"
        assert scripts["dev"].startswith("run-p")

    def test_add_package_scripts_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing package.json raises."""
        with pytest.raises(FileNotFoundError):
            add_package_scripts(tmp_path, {"lint": "eslint"})


# =============================================================================
# Directory Structure Tests
# =============================================================================

class TestDirectoryStructure:
    """Tests for directory creation."""

    def test_directories_created(self, ctx: SetupContext) -> None:
        """Test that all frontend directories exist."""
        create_directory_structure(ctx)

        for directory in [
            "frontend/entrypoints",
            "frontend/scripts/components",
            "frontend/scripts/sections",
            "frontend/scripts/hooks/core",
            "frontend/styles",
            "frontend/images",
            "frontend/fonts",
            ".github/workflows",
        ]:
            assert (ctx.root / directory).is_dir(), directory

    def test_gitkeep_files(self, ctx: SetupContext) -> None:
        """Test that empty directories get a .gitkeep."""
        create_directory_structure(ctx)

        assert (ctx.root / "frontend/fonts/.gitkeep").exists()
        assert (ctx.root / "frontend/scripts/sections/.gitkeep").exists()
        assert not (ctx.root / "frontend/entrypoints/.gitkeep").exists()

    def test_idempotent(self, ctx: SetupContext) -> None:
        """Test that running twice doesn't fail."""
        create_directory_structure(ctx)
        create_directory_structure(ctx)


# =============================================================================
# Config File Tests
# =============================================================================

class TestConfigFiles:
    """Tests for Vite, PostCSS and ignore files."""

    def test_vite_tunnel(self, ctx: SetupContext) -> None:
        """Test the tunnel option and allowed hosts."""
        create_vite_config(ctx)
        content = read(ctx.root, "vite.config.js")

        assert "tunnel: true" in content
        assert "allowedHosts: 'all'" in content
        assert "import shopify from 'vite-plugin-shopify'" in content

    def test_vite_without_tunnel(self, make_context) -> None:
        """Test that the tunnel is left out when disabled."""
        ctx = make_context(enable_tunnel=False)
        create_vite_config(ctx)
        content = read(ctx.root, "vite.config.js")

        assert "tunnel" not in content
        assert "allowedHosts" not in content

    def test_vite_scss_preprocessor(self, make_context) -> None:
        """Test the SCSS preprocessor block."""
        ctx = make_context(styling_approach=StylingApproach.SCSS)
        create_vite_config(ctx)

        assert "preprocessorOptions" in read(ctx.root, "vite.config.js")

    def test_postcss_tailwind(self, make_context) -> None:
        """Test the Tailwind plugin and config."""
        ctx = make_context(styling_approach=StylingApproach.TAILWIND)
        create_postcss_config(ctx)

        assert "tailwindcss: {}" in read(ctx.root, "postcss.config.js")
        assert (ctx.root / "tailwind.config.js").exists()

    def test_postcss_plain(self, ctx: SetupContext) -> None:
        """Test plain PostCSS without Tailwind."""
        create_postcss_config(ctx)

        assert "tailwindcss" not in read(ctx.root, "postcss.config.js")
        assert "autoprefixer: {}" in read(ctx.root, "postcss.config.js")
        assert not (ctx.root / "tailwind.config.js").exists()

    def test_gitignore_lockfiles(self, make_context) -> None:
        """Test that only other managers' lockfiles are ignored."""
        ctx = make_context(package_manager=PackageManager.NPM)
        create_gitignore(ctx)
        lines = read(ctx.root, ".gitignore").splitlines()

        assert "package-lock.json" not in lines
        assert "yarn.lock" in lines
        assert "bun.lockb" in lines
        assert "node_modules/" in lines


class TestGithubWorkflow:
    """Tests for the CI build workflow."""

    def test_pnpm_version_pinned(self, make_context) -> None:
        """Test that pnpm is set up with a version before Node.js."""
        ctx = make_context(package_manager=PackageManager.PNPM)
        create_github_workflow(ctx)
        content = read(ctx.root, ".github/workflows/build.yml")

        assert "uses: pnpm/action-setup@v4\n        with:\n          version: 9" in content
        assert content.index("pnpm/action-setup") < content.index("actions/setup-node")
        assert "run: pnpm install" in content

    def test_bun_setup(self, ctx: SetupContext) -> None:
        """Test the bun setup action and build command."""
        create_github_workflow(ctx)
        content = read(ctx.root, ".github/workflows/build.yml")

        assert "oven-sh/setup-bun" in content
        assert "bun-version: latest" in content
        assert "pnpm/action-setup" not in content
        assert "run: bun run build" in content

    def test_generated_by_header(self, ctx: SetupContext) -> None:
        """Test that the workflow names the themeforge version."""
        create_github_workflow(ctx)

        assert read(ctx.root, ".github/workflows/build.yml").startswith(
            f"# Generated by themeforge {__version__}\n"
        )


# =============================================================================
# Entrypoint Tests
# =============================================================================

class TestEntrypoints:
    """Tests for frontend entrypoints."""

    def test_javascript_css(self, ctx: SetupContext) -> None:
        """Test the recommended entrypoints."""
        create_entrypoints(ctx)

        assert (ctx.root / "frontend/entrypoints/storefront.js").exists()
        assert (ctx.root / "frontend/entrypoints/custom_styling.css").exists()
        assert not (ctx.root / "tsconfig.json").exists()

    def test_typescript_scss(self, make_context) -> None:
        """Test TypeScript and SCSS entrypoints."""
        ctx = make_context(js_approach=JsApproach.TYPESCRIPT, styling_approach=StylingApproach.SCSS)
        create_entrypoints(ctx)

        storefront = read(ctx.root, "frontend/entrypoints/storefront.ts")
        assert "declare global" in storefront
        assert (ctx.root / "frontend/entrypoints/custom_styling.scss").exists()
        assert json.loads(read(ctx.root, "tsconfig.json"))

    def test_storefront_global(self, ctx: SetupContext) -> None:
        """Test the storefront global is named after the project."""
        create_entrypoints(ctx)

        assert "window.acmestore" in read(ctx.root, "frontend/entrypoints/storefront.js")


# =============================================================================
# Theme TOML Tests
# =============================================================================

class TestThemeToml:
    """Tests for shopify.theme.toml."""

    def load(self, root: Path, name: str = "shopify.theme.toml") -> dict:
        with (root / name).open("rb") as f:
            return tomli.load(f)

    def test_store_and_theme(self, make_context) -> None:
        """Test the configured environment."""
        ctx = make_context(
            store_url="acme-store", theme_id="987", shopify_environment="staging"
        )
        create_theme_toml(ctx)
        data = self.load(ctx.root)

        assert data["environments"]["staging"] == {
            "store": "acme-store.myshopify.com",
            "theme": "987",
            "ignore": [".shopifyignore"],
        }

    def test_placeholders(self, ctx: SetupContext) -> None:
        """Test placeholders when no store or theme was given."""
        create_theme_toml(ctx)
        env = self.load(ctx.root)["environments"]["development"]

        assert env["store"] == "your-store.myshopify.com"
        assert env["theme"] == "your-theme-id"

    def test_quoted_values_escaped(self, make_context) -> None:
        """Test that quotes and backslashes in answers still give valid TOML."""
        ctx = make_context(store_url='my"shop', theme_id='12"3\\4')
        create_theme_toml(ctx)
        env = self.load(ctx.root)["environments"]["development"]

        assert env["store"] == 'my"shop.myshopify.com'
        assert env["theme"] == '12"3\\4'

    def test_other_environments_commented(self, ctx: SetupContext) -> None:
        """Test that example environments are comments."""
        create_theme_toml(ctx)
        content = read(ctx.root, "shopify.theme.toml")

        assert "# [environments.staging]" in content
        assert "# [environments.production]" in content
        assert set(self.load(ctx.root)["environments"]) == {"development"}

    @pytest.mark.parametrize("approach", [TomlApproach.CLI, TomlApproach.SKIP])
    def test_example_only(self, make_context, approach: TomlApproach) -> None:
        """Test that CLI and skip write only the example file."""
        ctx = make_context(toml_approach=approach)
        create_theme_toml(ctx)

        assert not (ctx.root / "shopify.theme.toml").exists()
        assert self.load(ctx.root, "example.shopify.theme.toml")["environments"]


# =============================================================================
# Linting Tests
# =============================================================================

class TestLinting:
    """Tests for the linting step."""

    def test_eslint_prettier(self, fake_run, ctx: SetupContext) -> None:
        """Test installing and configuring ESLint and Prettier."""
        setup_linting(ctx)

        assert fake_run.ran("bun", "add", "-d", "eslint")
        assert (ctx.root / "eslint.config.js").exists()
        assert (ctx.root / ".prettierrc").exists()
        assert (ctx.root / ".prettierignore").exists()

    def test_install_failure_stops_step(self, fake_run, ctx: SetupContext) -> None:
        """Test that configs aren't written when the install fails."""
        fake_run.respond("bun", "add", returncode=1)

        with pytest.raises(RuntimeError):
            setup_linting(ctx)

        assert not (ctx.root / "eslint.config.js").exists()

    def test_theme_check(self, fake_run, make_context) -> None:
        """Test that Theme Check needs no install."""
        ctx = make_context(linting_setup=LintingSetup.THEME_CHECK)
        setup_linting(ctx)

        assert fake_run.calls == []
        assert (ctx.root / ".theme-check.yml").exists()


# =============================================================================
# Git Hooks Tests
# =============================================================================

class TestGitHooks:
    """Tests for husky and lint-staged."""

    def test_hooks_configured(self, fake_run, ctx: SetupContext) -> None:
        """Test the full git hooks setup."""
        create_package_json(ctx)
        setup_git_hooks(ctx)

        assert fake_run.ran("bun", "add", "-d", "husky", "lint-staged")
        assert fake_run.ran("bunx", "husky", "init")

        hook = ctx.root / ".husky/pre-commit"
        assert "bunx lint-staged" in hook.read_text()
        if os.name == "posix":
            assert os.access(hook, os.X_OK)

        assert json.loads(read(ctx.root, ".lintstagedrc"))
        scripts = json.loads(read(ctx.root, "package.json"))["scripts"]
        assert scripts["lint"] == "eslint frontend/"
        assert scripts["prepare"] == "husky"
        assert ctx.result.warnings == []

    def test_theme_check_hook(self, fake_run, make_context) -> None:
        """Test the hook runs Theme Check without ESLint."""
        ctx = make_context(linting_setup=LintingSetup.THEME_CHECK)
        create_package_json(ctx)
        setup_git_hooks(ctx)

        assert "shopify theme check" in read(ctx.root, ".husky/pre-commit")
        assert not (ctx.root / ".lintstagedrc").exists()
        assert json.loads(read(ctx.root, "package.json"))["scripts"]["lint"] == "shopify theme check"

    def test_initializes_repository_for_husky(self, fake_run, ctx: SetupContext) -> None:
        """Test that husky gets a repository to install into."""
        fake_run.respond("git", "rev-parse", returncode=128)
        create_package_json(ctx)
        setup_git_hooks(ctx)

        assert fake_run.ran("git", "init")

    def test_husky_failure_is_warning(self, fake_run, ctx: SetupContext) -> None:
        """Test that a failed husky init doesn't stop the step."""
        fake_run.respond("bunx", "husky", returncode=1)
        create_package_json(ctx)
        setup_git_hooks(ctx)

        assert len(ctx.result.warnings) == 1
        assert "Husky init skipped" in ctx.result.warnings[0]
        assert (ctx.root / ".husky/pre-commit").exists()

    def test_missing_package_json_is_warning(self, fake_run, ctx: SetupContext) -> None:
        """Test that the scripts update degrades to a warning."""
        setup_git_hooks(ctx)

        assert any("package.json" in w for w in ctx.result.warnings)

    def test_install_failure_stops_step(self, fake_run, ctx: SetupContext) -> None:
        """Test that a failed install fails the step."""
        fake_run.respond("bun", "add", returncode=1)

        with pytest.raises(RuntimeError):
            setup_git_hooks(ctx)

        assert not (ctx.root / ".husky/pre-commit").exists()


# =============================================================================
# CLAUDE.md Tests
# =============================================================================

class TestClaudeMd:
    """Tests for the CLAUDE.md context section."""

    def test_created_when_missing(self, ctx: SetupContext) -> None:
        """Test that a missing CLAUDE.md is created with the context."""
        update_claude_md(ctx)
        content = read(ctx.root, "CLAUDE.md")

        assert content.startswith("# CLAUDE.md")
        assert content.count("## Project-Specific Context") == 1
        assert "acme-store" in content

    def test_existing_content_kept(self, ctx: SetupContext) -> None:
        """Test that hand-written guidance is preserved."""
        (ctx.root / "CLAUDE.md").write_text("# Rules\n\nUse semantic classes.\n")
        update_claude_md(ctx)
        content = read(ctx.root, "CLAUDE.md")

        assert content.startswith("# Rules\n\nUse semantic classes.")
        assert "## Project-Specific Context" in content

    def test_not_duplicated(self, ctx: SetupContext) -> None:
        """Test that running twice replaces the generated section."""
        update_claude_md(ctx)
        first = read(ctx.root, "CLAUDE.md")
        update_claude_md(ctx)

        assert read(ctx.root, "CLAUDE.md") == first

    def test_merge_replaces_section(self) -> None:
        """Test merging into text that already has a generated section."""
        existing = "# Guide\n\n---\n\n## Project-Specific Context\n\nold\n"
        context = "\n\n---\n\n## Project-Specific Context\n\nnew\n"

        merged = merge_claude_context(existing, context)

        assert merged == "# Guide\n\n---\n\n## Project-Specific Context\n\nnew\n"


# =============================================================================
# Secure Theme TOML Tests
# =============================================================================

class TestSecureThemeToml:
    """Tests for adding shopify.theme.toml to .gitignore."""

    def test_inserted_under_shopify_block(self) -> None:
        """Test the entry lands in the Shopify theme files block."""
        gitignore = "node_modules/\n\n# Shopify theme files\nconfig/settings_data.json\n\n*.log\n"

        updated = ignore_theme_toml(gitignore)

        assert "# Shopify theme files\nconfig/settings_data.json\nshopify.theme.toml\n" in updated

    def test_idempotent(self) -> None:
        """Test the entry is never added twice."""
        once = ignore_theme_toml("# Shopify theme files\nconfig/settings_data.json\n")

        assert ignore_theme_toml(once) == once

    def test_appended_without_anchor(self) -> None:
        """Test a hand-written .gitignore without the Shopify block."""
        updated = ignore_theme_toml("node_modules/\n")

        assert updated.splitlines()[-1] == "shopify.theme.toml"

    def test_example_file_not_mistaken(self) -> None:
        """Test that the example file entry doesn't count."""
        updated = ignore_theme_toml("example.shopify.theme.toml\n")

        assert "shopify.theme.toml" in updated.splitlines()


# =============================================================================
# Git Tests
# =============================================================================

class TestInitializeGit:
    """Tests for the git step."""

    def test_existing_repository_left_alone(self, fake_run, ctx: SetupContext) -> None:
        """Test that a repository with commits isn't touched."""
        initialize_git(ctx)

        assert not fake_run.ran("git", "init")
        assert not fake_run.ran("git", "commit")

    def test_new_repository(self, fake_run, ctx: SetupContext) -> None:
        """Test init, add and commit in a plain directory."""
        fake_run.respond("git", "rev-parse", returncode=128)
        initialize_git(ctx)

        assert fake_run.ran("git", "init")
        assert fake_run.ran("git", "add", ".")
        assert fake_run.ran("git", "commit", "-m", "Initial commit: Shopify theme setup")

    def test_repository_without_commits(self, fake_run, ctx: SetupContext) -> None:
        """Test that a freshly initialized repository gets the first commit."""
        fake_run.respond("git", "rev-parse", "--verify", returncode=128)
        initialize_git(ctx)

        assert not fake_run.ran("git", "init")
        assert fake_run.ran("git", "commit")


# =============================================================================
# Validation Tests
# =============================================================================

class TestValidateSetup:
    """Tests for post-setup validation."""

    def test_empty_directory(self, theme_dir: Path) -> None:
        """Test that an empty directory reports missing files."""
        success, issues = validate_setup(SetupConfig(project_name="acme"), theme_dir)

        assert success is False
        assert any("package.json" in issue for issue in issues)

    def test_invalid_package_json(self, fake_run, theme_dir: Path) -> None:
        """Test that unparseable package.json is reported."""
        config = SetupConfig(project_name="acme")
        run_setup(config, theme_dir, verbose=False, validate=False)
        (theme_dir / "package.json").write_text("{not json")

        success, issues = validate_setup(config, theme_dir)

        assert success is False
        assert any("Invalid package.json" in issue for issue in issues)

    def test_invalid_toml(self, fake_run, theme_dir: Path) -> None:
        """Test that unparseable shopify.theme.toml is reported."""
        config = SetupConfig(project_name="acme")
        run_setup(config, theme_dir, verbose=False, validate=False)
        (theme_dir / "shopify.theme.toml").write_text("[environments\n")

        success, issues = validate_setup(config, theme_dir)

        assert success is False
        assert any("shopify.theme.toml" in issue for issue in issues)


# =============================================================================
# End-to-End Tests
# =============================================================================

class TestRunSetup:
    """End-to-end tests for run_setup."""

    def test_recommended_setup(self, fake_run, theme_dir: Path) -> None:
        """Test a full run with every command succeeding."""
        result = run_setup(SetupConfig(project_name="acme-store"), theme_dir, verbose=False)

        assert result.success
        assert result.errors == []
        assert result.validation_passed
        assert result.skipped_steps == ["Pulling Shopify Theme"]
        for name in [
            "package.json",
            "vite.config.js",
            "postcss.config.js",
            ".gitignore",
            ".shopifyignore",
            ".github/workflows/build.yml",
            "frontend/entrypoints/storefront.js",
            "frontend/entrypoints/custom_styling.css",
            "frontend/scripts/utils.js",
            "frontend/scripts/hooks/core/sectionRegistry.js",
            "shopify.theme.toml",
            "eslint.config.js",
            ".husky/pre-commit",
            "CLAUDE.md",
        ]:
            assert (theme_dir / name).exists(), name

        assert fake_run.ran("bun", "add", "-d", "vite@6.0.8")
        assert fake_run.ran("bun", "run", "build")

    def test_steps_run_in_order(self) -> None:
        """Test that credentials are ignored before the git step runs."""
        titles = [step.title for step in SETUP_STEPS]

        assert titles[0] == "Creating package.json"
        assert titles[-2] == "Securing shopify.theme.toml"
        assert titles[-1] == "Initializing Git Repository"
        assert len(titles) == 18

    def test_failing_command_does_not_stop_setup(self, fake_run, theme_dir: Path) -> None:
        """Test that later steps run after a failed install."""
        fake_run.respond("bun", "add", returncode=1)

        result = run_setup(SetupConfig(project_name="acme-store"), theme_dir, verbose=False)

        assert not result.success
        failed = [error.split(":")[0] for error in result.errors]
        assert "Installing Dependencies" in failed
        assert "Setting Up Linting" in failed
        assert "Setting Up Git Hooks" in failed
        assert (theme_dir / "vite.config.js").exists()
        assert (theme_dir / "CLAUDE.md").exists()
        assert "shopify.theme.toml" in read(theme_dir, ".gitignore").splitlines()
        assert fake_run.ran("bun", "run", "build")

    def test_missing_tools(self, fake_run, theme_dir: Path) -> None:
        """Test a machine without bun, shopify or git."""
        for tool in ("bun", "bunx", "shopify", "git"):
            fake_run.respond(tool, missing=True)

        result = run_setup(
            SetupConfig(project_name="acme-store", theme_id="42"), theme_dir, verbose=False
        )

        assert any("command not found: shopify" in error for error in result.errors)
        assert any(error.startswith("Initializing Git Repository") for error in result.errors)
        assert result.validation_passed

    def test_skipped_steps(self, fake_run, theme_dir: Path) -> None:
        """Test that disabled features are skipped."""
        config = SetupConfig(
            project_name="acme-store",
            linting_setup=LintingSetup.SKIP,
            git_hooks=False,
        )

        result = run_setup(config, theme_dir, verbose=False)

        assert "Setting Up Linting" in result.skipped_steps
        assert "Setting Up Git Hooks" in result.skipped_steps
        assert not (theme_dir / ".husky").exists()
        assert not fake_run.ran("bun", "add", "-d", "husky", "lint-staged")

    def test_theme_pulled(self, fake_run, theme_dir: Path) -> None:
        """Test that a selected theme is pulled."""
        config = SetupConfig(project_name="acme-store", theme_id="42", shopify_environment="staging")

        run_setup(config, theme_dir, verbose=False)

        assert fake_run.ran(
            "shopify", "theme", "pull", "--theme", "42", "--environment", "staging"
        )

    def test_rerun_converges(self, fake_run, theme_dir: Path) -> None:
        """Test that a second run doesn't duplicate generated content."""
        config = SetupConfig(project_name="acme-store")

        run_setup(config, theme_dir, verbose=False)
        run_setup(config, theme_dir, verbose=False)

        gitignore = read(theme_dir, ".gitignore").splitlines()
        assert gitignore.count("shopify.theme.toml") == 1
        assert read(theme_dir, "CLAUDE.md").count("## Project-Specific Context") == 1

    def test_creates_root(self, fake_run, tmp_path: Path) -> None:
        """Test that a missing target directory is created."""
        root = tmp_path / "new" / "theme"

        result = run_setup(SetupConfig(project_name="acme"), root, verbose=False)

        assert (root / "package.json").exists()
        assert result.root == root

    def test_verbose_output(self, fake_run, theme_dir: Path, capsys: pytest.CaptureFixture) -> None:
        """Test that progress and the next steps are printed."""
        run_setup(SetupConfig(project_name="acme-store"), theme_dir)
        output = capsys.readouterr().out

        assert "Creating package.json" in output
        assert "Setup Complete!" in output
