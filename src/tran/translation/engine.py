"""Translation engine with multiple backend support."""

import json
import logging
from abc import ABC, abstractmethod
from typing import Optional

import requests

from ..config import TranConfig
from ..errors import BackendError
from ..languages import DEFAULT_TABLE, MappingLanguageSource

logger = logging.getLogger(__name__)


# Codes TranslateGemma accepts beyond ISO 639-1
TRANSLATEGEMMA_VARIANTS = {
    "pt-BR": "Brazilian Portuguese",
    "zh-Hans": "Simplified Chinese",
    "zh-Hant": "Traditional Chinese",
}


def language_name(code: str, extra: Optional[dict[str, str]] = None) -> str:
    """Get the English name for a code, falling back to the code."""
    if extra and code in extra:
        return extra[code]
    return DEFAULT_TABLE.lookup_exact(code) or code


class TranslationBackend(ABC):
    """Abstract base class for translation backends."""

    name = "backend"

    @abstractmethod
    def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str
    ) -> str:
        """Translate text from source to target language.

        Args:
            text: Text to translate.
            source_lang: Source language code.
            target_lang: Target language code.

        Returns:
            Translated text.

        Raises:
            BackendError: If the request fails.
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the backend is available and ready."""
        pass

    def supported_languages(self) -> dict[str, str]:
        """Languages the backend accepts in addition to the static table."""
        return {}


class OllamaBackend(TranslationBackend):
    """Ollama-based translation backend using TranslateGemma."""

    name = "ollama"

    def __init__(
        self,
        url: str = "http://localhost:11434",
        model: str = "translategemma:12b",
        timeout: float = 120
    ):
        """Initialize the Ollama backend.

        Args:
            url: Ollama API URL.
            model: Model name to use.
            timeout: Request timeout in seconds.
        """
        self.url = url.rstrip('/')
        self.model = model
        self.timeout = timeout

    def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str
    ) -> str:
        """Translate text using Ollama.

        Uses the prompt format TranslateGemma expects, which requires
        2 blank lines before the text to translate.
        """
        source_name = language_name(source_lang, TRANSLATEGEMMA_VARIANTS)
        target_name = language_name(target_lang, TRANSLATEGEMMA_VARIANTS)

        # Critical: TranslateGemma requires 2 blank lines before text
        prompt = (
            f"You are a professional {source_name} ({source_lang}) to "
            f"{target_name} ({target_lang}) translator. Translate the "
            f"following text accurately while preserving the meaning, tone "
            f"and line breaks. Only output the translation, nothing else.\n\n\n{text}"
        )

        logger.debug("POST %s/api/generate model=%s chars=%d", self.url, self.model, len(text))
        try:
            response = requests.post(
                f"{self.url}/api/generate",
                json={
                    "model": self.model,
                    "prompt": prompt,
                    "stream": False,
                    "options": {
                        "temperature": 0.1,  # Low temperature for consistent translations
                    }
                },
                timeout=self.timeout
            )
            response.raise_for_status()
            result = response.json()
        except (requests.RequestException, json.JSONDecodeError) as e:
            raise BackendError(f"Ollama request failed: {e}", backend=self.name)

        if "error" in result:
            raise BackendError(f"Ollama error: {result['error']}", backend=self.name)
        return result.get("response", "").strip()

    def is_available(self) -> bool:
        """Check if Ollama is running and the model is available."""
        try:
            response = requests.get(f"{self.url}/api/tags", timeout=5)
            response.raise_for_status()

            models = response.json().get("models", [])
            model_names = [m.get("name", "") for m in models]

            # Check for exact match or base name match
            base_model = self.model.split(":")[0]
            return any(
                self.model in name or base_model in name
                for name in model_names
            )
        except (requests.RequestException, json.JSONDecodeError):
            return False

    def supported_languages(self) -> dict[str, str]:
        return dict(TRANSLATEGEMMA_VARIANTS)


class EndpointBackend(TranslationBackend):
    """Backend for a simple HTTP translation endpoint.

    The endpoint is queried with GET parameters ``text``, ``source`` and
    ``target`` and answers with JSON ``{"text": ...}`` or a plain body.
    ``?languages=1`` returns a JSON object of code to name.
    """

    name = "endpoint"

    def __init__(self, url: str, timeout: float = 120):
        self.url = url
        self.timeout = timeout
        self._languages: Optional[dict[str, str]] = None

    def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str
    ) -> str:
        logger.debug("GET %s %s -> %s chars=%d", self.url, source_lang, target_lang, len(text))
        try:
            response = requests.get(
                self.url,
                params={"text": text, "source": source_lang, "target": target_lang},
                timeout=self.timeout
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise BackendError(f"endpoint request failed: {e}", backend=self.name)

        if "json" not in response.headers.get("Content-Type", ""):
            return response.text

        try:
            result = response.json()
        except json.JSONDecodeError as e:
            raise BackendError(f"endpoint returned invalid JSON: {e}", backend=self.name)
        if isinstance(result, dict) and "error" in result:
            raise BackendError(f"endpoint error: {result['error']}", backend=self.name)
        if not isinstance(result, dict) or "text" not in result:
            raise BackendError("endpoint response has no text", backend=self.name)
        return result["text"]

    def is_available(self) -> bool:
        try:
            response = requests.get(self.url, params={"languages": 1}, timeout=5)
            response.raise_for_status()
            return True
        except requests.RequestException:
            return False

    def supported_languages(self) -> dict[str, str]:
        """Fetch the endpoint's language list once; empty on failure."""
        if self._languages is None:
            try:
                response = requests.get(self.url, params={"languages": 1}, timeout=self.timeout)
                response.raise_for_status()
                data = response.json()
            except (requests.RequestException, json.JSONDecodeError) as e:
                logger.warning("Could not fetch endpoint languages: %s", e)
                return {}
            if not isinstance(data, dict):
                logger.warning("Ignoring malformed endpoint language list")
                data = {}
            self._languages = {str(code): str(name) for code, name in data.items()}
        return self._languages


class TranslationEngine:
    """Main translation engine that manages backends."""

    def __init__(self, config: Optional[TranConfig] = None):
        """Initialize the translation engine.

        Args:
            config: Translator configuration. Uses defaults if not provided.
        """
        self.config = config or TranConfig()
        self._backend: Optional[TranslationBackend] = None

    @property
    def backend(self) -> TranslationBackend:
        """Get or create the translation backend."""
        if self._backend is None:
            if self.config.backend == "endpoint":
                self._backend = EndpointBackend(
                    self.config.endpoint_url,
                    self.config.timeout
                )
            else:
                self._backend = OllamaBackend(
                    self.config.ollama_url,
                    self.config.ollama_model,
                    self.config.timeout
                )
        return self._backend

    def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        """Translate text between two language codes."""
        return self.backend.translate(text, source_lang, target_lang)

    def language_source(self) -> Optional[MappingLanguageSource]:
        """The backend's own language list, or None if it has none."""
        languages = self.backend.supported_languages()
        if not languages:
            return None
        return MappingLanguageSource(languages)

    def is_available(self) -> bool:
        """Check if the translation backend is available."""
        return self.backend.is_available()
