"""Command line interface for filterpipe."""

from filterpipe.cli.typer_app import app, run

__all__ = ["app", "run"]
