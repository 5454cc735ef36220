"""Command-line interface for Taskboard."""

from .main import main

__all__ = ["main"]
