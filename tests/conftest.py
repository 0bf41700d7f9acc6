"""
pytest configuration and shared fixtures for themeforge tests.

This module provides fixtures and configuration used across all test modules.
Fixtures defined here are automatically available to all tests.

Fixtures
--------
theme_dir : Path
    An empty theme directory that is cleaned up after each test.

fake_run : FakeRun
    Replaces ``subprocess.run`` in ``themeforge.commands`` and records
    every command line. All commands succeed unless told otherwise.

output_console : Console
    A rich Console writing to a StringIO buffer, without colors.

sample_answers : str
    A sample answers TOML file content.
"""

import io
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console


# =============================================================================
# Subprocess Fake
# =============================================================================

class FakeRun:
    """
    Stand-in for ``subprocess.run``.

    Responses are matched on the longest command-line prefix registered
    with :meth:`respond`; unmatched commands exit 0 with no output.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.responses: dict[tuple[str, ...], dict] = {}

    def respond(
        self,
        *prefix: str,
        returncode: int = 0,
        stdout: str = "",
        stderr: str = "",
        missing: bool = False,
    ) -> None:
        self.responses[prefix] = {
            "returncode": returncode,
            "stdout": stdout,
            "stderr": stderr,
            "missing": missing,
        }

    def ran(self, *prefix: str) -> bool:
        """Whether any recorded command starts with ``prefix``."""
        return any(tuple(call[: len(prefix)]) == prefix for call in self.calls)

    def __call__(self, argv, **kwargs) -> subprocess.CompletedProcess:
        argv = list(argv)
        self.calls.append(argv)

        response = {"returncode": 0, "stdout": "", "stderr": "", "missing": False}
        for prefix in sorted(self.responses, key=len, reverse=True):
            if tuple(argv[: len(prefix)]) == prefix:
                response = self.responses[prefix]
                break

        if response["missing"]:
            raise FileNotFoundError(2, "No such file or directory", argv[0])

        captured = kwargs.get("capture_output", False)
        return subprocess.CompletedProcess(
            argv,
            response["returncode"],
            stdout=response["stdout"] if captured else None,
            stderr=response["stderr"] if captured else None,
        )


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def theme_dir(tmp_path: Path) -> Path:
    """
    Create an empty theme directory to run setup steps in.

    Returns
    -------
    Path
        Path to the directory.
    """
    directory = tmp_path / "theme"
    directory.mkdir()
    return directory


@pytest.fixture
def fake_run():
    """
    Patch subprocess.run for every external command themeforge runs.

    Yields
    ------
    FakeRun
        The recording fake; register failures with ``respond``.
    """
    fake = FakeRun()
    with patch("themeforge.commands.subprocess.run", side_effect=fake):
        yield fake


@pytest.fixture
def output_console() -> Console:
    """A Console whose output can be read back with ``console.file.getvalue()``."""
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def sample_answers() -> str:
    """
    Provide sample answers file content for testing.

    Returns
    -------
    str
        A valid answers TOML selecting non-default options.
    """
    return '''
project_name = "Acme-Store"
styling_approach = "scss"
js_approach = "typescript"
package_manager = "pnpm"
enable_tunnel = false
toml_approach = "file"
store_url = "https://acme-store.myshopify.com/"
linting_setup = "theme-check"
git_hooks = false
shopify_environment = "staging"
theme_id = 123456789
store_type = "b2b"
project_description = "  Wholesale storefront  "
'''


# =============================================================================
# pytest Configuration
# =============================================================================

def pytest_configure(config: pytest.Config) -> None:
    """
    Configure pytest with custom markers.

    This function is called by pytest during startup to register
    custom markers used in our test suite.
    """
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests requiring external resources"
    )
