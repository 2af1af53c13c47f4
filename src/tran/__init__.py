"""Command-line and interactive text translator."""

__version__ = "0.1.0"
