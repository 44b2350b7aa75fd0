"""
channelspec CLI Package.

- main.py: the typer application and its commands
- utils.py: shared output and loading helpers
"""

from channelspec.cli.main import app, main
from channelspec.cli.utils import version_callback

__all__ = [
    "app",
    "main",
    "version_callback",
]
