"""Configuration for the translator."""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .errors import ConfigError
from .languages import DEFAULT_TABLE


BACKENDS = ("ollama", "endpoint")


def current_language(environ: Optional[Mapping[str, str]] = None) -> tuple[str, str]:
    """Get the language named by the LANG locale variable.

    Only an exact code of the static table is accepted; anything else falls
    back to English.

    Args:
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        Tuple of (code, name), e.g. ("ja", "Japanese").
    """
    env = os.environ if environ is None else environ
    code = env.get("LANG", "")[:2].lower()
    if len(code) != 2 or code not in DEFAULT_TABLE:
        return "en", "English"
    return code, DEFAULT_TABLE.lookup_exact(code)


@dataclass
class TranConfig:
    """Configuration for the translator.

    Attributes:
        source_language: Default source language (code or name).
        target_language: Default target language (code or name).
        backend: Translation backend, "ollama" or "endpoint".
        ollama_url: URL for Ollama API.
        ollama_model: Model name for Ollama.
        endpoint_url: URL of an HTTP translation endpoint.
        limit_chars: Maximum characters sent to the backend per request.
        timeout: Backend request timeout in seconds.
        phrases_file: Optional JSON phrase book merged into the built-in one.
        info_color: Colour for help and language tables.
        state_color: Colour for language change notices.
        error_color: Colour for errors.
        result_color: Colour for translations.
        verbose: If True, log debug output.
    """
    source_language: str = field(default_factory=lambda: current_language()[0])
    target_language: str = "ja"
    backend: str = "ollama"
    ollama_url: str = "http://localhost:11434"
    ollama_model: str = "translategemma:12b"
    endpoint_url: Optional[str] = None
    limit_chars: int = 5000
    timeout: float = 120
    phrases_file: Optional[str] = None
    info_color: str = "cyan"
    state_color: str = "yellow"
    error_color: str = "red"
    result_color: str = "green"
    verbose: bool = False

    def validate(self) -> None:
        """Check option combinations.

        Raises:
            ConfigError: If the configuration cannot be used.
        """
        if self.backend not in BACKENDS:
            raise ConfigError(f"unknown backend: {self.backend}")
        if self.backend == "endpoint" and not self.endpoint_url:
            raise ConfigError("the endpoint backend requires an endpoint URL")
        if self.limit_chars < 1:
            raise ConfigError(f"limit must be at least 1, got {self.limit_chars}")
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")
