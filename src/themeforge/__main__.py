"""Allow ``python -m themeforge``."""

from themeforge.cli import app


app(prog_name="themeforge")
