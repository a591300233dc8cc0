"""
filterpipe Package Main Entry Point

Runs the CLI when the package is executed with ``python -m filterpipe``.
"""

from filterpipe.cli import run

if __name__ == "__main__":
    run()
