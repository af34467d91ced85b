"""
CLI module for sneakpeek.

Provides the command-line interface, kept as a thin layer over the services.
"""
from sneakpeek.cli.app import app as _app

# Export app function for pyproject.toml entry point
def app():
    """Entry point function for pyproject.toml scripts."""
    _app()

__all__ = ['app']
