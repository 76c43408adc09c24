"""
consulcat command line interface.

Read-only catalog queries from the shell, rendered as rich tables or JSON.
The console script entry point is ``consulcat.cli.main:main``.
"""

from .main import cli

__all__ = ["cli"]
