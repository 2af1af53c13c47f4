"""Tests for translation backends and the engine."""

import json
from unittest.mock import Mock, patch

import pytest
import requests

from tran.config import TranConfig
from tran.errors import BackendError, ConfigError
from tran.languages import LanguageResolver
from tran.translation import EndpointBackend, OllamaBackend, PhraseBook, TranslationEngine


def json_response(payload, content_type="application/json"):
    response = Mock()
    response.json.return_value = payload
    response.headers = {"Content-Type": content_type}
    response.raise_for_status.return_value = None
    return response


class TestOllamaBackend:
    """Tests for OllamaBackend with mocked requests."""

    def test_translate(self):
        """Test the prompt names both languages and the reply is stripped."""
        backend = OllamaBackend("http://ollama:11434/", "translategemma:4b", timeout=30)

        with patch("tran.translation.engine.requests.post") as mock_post:
            mock_post.return_value = json_response({"response": " Bonjour \n"})
            result = backend.translate("Hello\n", "en", "fr")

        assert result == "Bonjour"
        args, kwargs = mock_post.call_args
        assert args[0] == "http://ollama:11434/api/generate"
        assert kwargs["json"]["model"] == "translategemma:4b"
        assert "English (en)" in kwargs["json"]["prompt"]
        assert "French (fr)" in kwargs["json"]["prompt"]
        assert kwargs["json"]["prompt"].endswith("\n\n\nHello\n")
        assert kwargs["timeout"] == 30

    def test_variant_names(self):
        """Test region variants are named in the prompt."""
        backend = OllamaBackend()
        with patch("tran.translation.engine.requests.post") as mock_post:
            mock_post.return_value = json_response({"response": "Olá"})
            backend.translate("Hello", "en", "pt-BR")

        assert "Brazilian Portuguese (pt-BR)" in mock_post.call_args[1]["json"]["prompt"]

    def test_request_error(self):
        """Test connection errors become BackendError."""
        backend = OllamaBackend()
        with patch("tran.translation.engine.requests.post") as mock_post:
            mock_post.side_effect = requests.ConnectionError("refused")
            with pytest.raises(BackendError) as excinfo:
                backend.translate("Hello", "en", "fr")

        assert excinfo.value.backend == "ollama"
        assert "refused" in str(excinfo.value)

    def test_error_payload(self):
        """Test an error field in the reply becomes BackendError."""
        backend = OllamaBackend()
        with patch("tran.translation.engine.requests.post") as mock_post:
            mock_post.return_value = json_response({"error": "model not found"})
            with pytest.raises(BackendError, match="model not found"):
                backend.translate("Hello", "en", "fr")

    def test_is_available(self):
        """Test availability checks the model list."""
        backend = OllamaBackend(model="translategemma:12b")
        with patch("tran.translation.engine.requests.get") as mock_get:
            mock_get.return_value = json_response({"models": [{"name": "translategemma:12b"}]})
            assert backend.is_available()

            mock_get.return_value = json_response({"models": [{"name": "llama3:8b"}]})
            assert not backend.is_available()

            mock_get.side_effect = requests.ConnectionError()
            assert not backend.is_available()

    def test_supported_languages(self):
        """Test TranslateGemma variants are exposed."""
        assert OllamaBackend().supported_languages()["zh-Hant"] == "Traditional Chinese"


class TestEndpointBackend:
    """Tests for EndpointBackend with mocked requests."""

    def test_translate_json(self):
        """Test a JSON reply."""
        backend = EndpointBackend("https://example.test/translate")
        with patch("tran.translation.engine.requests.get") as mock_get:
            mock_get.return_value = json_response({"text": "こんにちは\n"})
            result = backend.translate("Hello\n", "en", "ja")

        assert result == "こんにちは\n"
        assert mock_get.call_args[1]["params"] == {"text": "Hello\n", "source": "en", "target": "ja"}

    def test_translate_plain_text(self):
        """Test a plain text reply."""
        backend = EndpointBackend("https://example.test/translate")
        response = json_response(None, content_type="text/plain; charset=utf-8")
        response.text = "Hallo"
        with patch("tran.translation.engine.requests.get", return_value=response):
            assert backend.translate("Hello", "en", "de") == "Hallo"

    def test_translate_missing_text(self):
        """Test a JSON reply without text."""
        backend = EndpointBackend("https://example.test/translate")
        with patch("tran.translation.engine.requests.get") as mock_get:
            mock_get.return_value = json_response({"other": 1})
            with pytest.raises(BackendError):
                backend.translate("Hello", "en", "de")

    def test_invalid_json(self):
        """Test undecodable JSON becomes BackendError."""
        backend = EndpointBackend("https://example.test/translate")
        response = json_response(None)
        response.json.side_effect = json.JSONDecodeError("bad", "", 0)
        with patch("tran.translation.engine.requests.get", return_value=response):
            with pytest.raises(BackendError):
                backend.translate("Hello", "en", "de")

    def test_supported_languages_cached(self):
        """Test the language list is fetched once."""
        backend = EndpointBackend("https://example.test/translate")
        with patch("tran.translation.engine.requests.get") as mock_get:
            mock_get.return_value = json_response({"en": "English", "fil": "Filipino"})
            assert backend.supported_languages()["fil"] == "Filipino"
            backend.supported_languages()

        assert mock_get.call_count == 1

    def test_supported_languages_failure(self):
        """Test a failing language list is empty."""
        backend = EndpointBackend("https://example.test/translate")
        with patch("tran.translation.engine.requests.get") as mock_get:
            mock_get.side_effect = requests.Timeout()
            assert backend.supported_languages() == {}


class TestTranslationEngine:
    """Tests for TranslationEngine."""

    def test_default_backend(self):
        """Test Ollama is the default backend."""
        engine = TranslationEngine(TranConfig(source_language="en"))
        assert isinstance(engine.backend, OllamaBackend)

    def test_endpoint_backend(self):
        """Test the endpoint backend is built from config."""
        config = TranConfig(backend="endpoint", endpoint_url="https://example.test/t")
        engine = TranslationEngine(config)
        assert isinstance(engine.backend, EndpointBackend)
        assert engine.backend.url == "https://example.test/t"

    def test_translate_with_mocked_backend(self):
        """Test translation is delegated to the backend."""
        engine = TranslationEngine(TranConfig())
        with patch.object(engine.backend, "translate", return_value="Hallo Welt") as mock_translate:
            assert engine.translate("Hello World", "en", "de") == "Hallo Welt"
            mock_translate.assert_called_once_with("Hello World", "en", "de")

    def test_language_source(self):
        """Test the backend's language list becomes a resolver source."""
        engine = TranslationEngine(TranConfig())
        source = engine.language_source()
        assert source.lookup_code("zh-hans").code == "zh-Hans"

        with patch.object(engine.backend, "supported_languages", return_value={}):
            assert engine.language_source() is None

    def test_backend_names_searched_first(self):
        """Test name fragments prefer the backend's variants over the table."""
        engine = TranslationEngine(TranConfig())
        resolver = LanguageResolver.with_external(engine.language_source())

        assert resolver.resolve("portuguese").code == "pt-BR"
        assert resolver.resolve("chinese").code == "zh-Hans"
        assert resolver.resolve("pt").code == "pt"
        assert resolver.resolve("zh").code == "zh"


class TestTranConfig:
    """Tests for TranConfig validation."""

    def test_defaults_valid(self):
        """Test the default configuration validates."""
        TranConfig().validate()

    @pytest.mark.parametrize("kwargs", [
        {"backend": "carrier-pigeon"},
        {"backend": "endpoint"},
        {"limit_chars": 0},
        {"timeout": 0},
    ])
    def test_invalid(self, kwargs):
        """Test invalid combinations raise ConfigError."""
        with pytest.raises(ConfigError):
            TranConfig(**kwargs).validate()


class TestPhraseBook:
    """Tests for PhraseBook."""

    def test_builtin(self):
        """Test built-in phrases by target."""
        book = PhraseBook()
        assert book.lookup("Time is money", "de") == "Zeit ist Geld"
        assert book.lookup("  Time is money ", "de") == "Zeit ist Geld"
        assert book.lookup("Time is money", "ko") is None
        assert book.lookup("time is money", "de") is None

    def test_from_file(self, tmp_path):
        """Test phrases merge from a JSON file."""
        path = tmp_path / "phrases.json"
        path.write_text(json.dumps({"Cheers": {"de": "Prost"}}), encoding="utf-8")

        book = PhraseBook.from_file(path)
        assert book.lookup("Cheers", "de") == "Prost"
        assert book.lookup("Time is money", "ja") == "時は金なり"

        assert PhraseBook.from_file(path, include_builtin=False).lookup("Time is money", "ja") is None

    def test_from_bad_file(self, tmp_path):
        """Test malformed phrase books raise ConfigError."""
        path = tmp_path / "phrases.json"
        path.write_text('["not", "an", "object"]', encoding="utf-8")
        with pytest.raises(ConfigError):
            PhraseBook.from_file(path)

        with pytest.raises(ConfigError):
            PhraseBook.from_file(tmp_path / "missing.json")
