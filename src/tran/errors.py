"""
Translator Exceptions

Kept in one module so the language, translation and session layers can
raise and catch the same types without importing each other.
"""


class TranError(Exception):
    """Base error for the translator."""


class LanguageNotFound(TranError):
    """A query resolved to no language code."""

    def __init__(self, query: str):
        super().__init__(f'"{query}" is not found')
        self.query = query


class BackendError(TranError):
    """The translation backend failed or returned something unusable."""

    def __init__(self, message: str, backend: str = ""):
        super().__init__(message)
        self.backend = backend


class StreamOpenError(TranError):
    """A batch input file could not be opened."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path


class ConfigError(TranError):
    """Invalid configuration."""
