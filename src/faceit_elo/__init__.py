"""FACEIT Elo lookups for CS2 server rosters."""

from .cli import main

__version__ = "1.1.0"

__all__ = ["__version__", "main"]
