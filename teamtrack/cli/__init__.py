"""Command-line interface (``python -m teamtrack.cli``)."""

from .main import main

__all__ = ["main"]
