"""Command line interface for victory-archive."""

from .dispatcher import main

__all__ = ["main"]
