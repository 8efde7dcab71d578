"""CLI package for dotpick.

This package contains the Typer application, the selectors and the
result display helpers.
"""

from dotpick.cli.main import app

__all__ = ["app"]
