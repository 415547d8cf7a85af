"""Command-line interface for the mini DOM parser."""

from .main import main

__all__ = ["main"]
