"""Command-line interface for building and checking XML element trees."""

from .main import main

__all__ = ["main"]
