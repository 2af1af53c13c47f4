"""Local phrase book consulted before the backend."""

import json
from pathlib import Path
from typing import Optional

from ..errors import ConfigError


# Fixed phrases whose literal translation reads wrong.
BUILTIN_PHRASES = {
    "Time is money": {
        "de": "Zeit ist Geld",
        "es": "El tiempo es oro",
        "fr": "Le temps, c'est de l'argent",
        "ja": "時は金なり",
    },
    "Practice makes perfect": {
        "de": "Übung macht den Meister",
        "es": "La práctica hace al maestro",
        "fr": "C'est en forgeant qu'on devient forgeron",
        "ja": "習うより慣れろ",
    },
    "When in Rome, do as the Romans do": {
        "de": "Andere Länder, andere Sitten",
        "es": "Donde fueres, haz lo que vieres",
        "fr": "À Rome, fais comme les Romains",
        "ja": "郷に入っては郷に従え",
    },
    "Seeing is believing": {
        "es": "Ver para creer",
        "fr": "Voir, c'est croire",
        "ja": "百聞は一見に如かず",
    },
}


class PhraseBook:
    """Maps literal phrases to per-language translations."""

    def __init__(self, phrases: Optional[dict[str, dict[str, str]]] = None):
        """Initialize the phrase book.

        Args:
            phrases: Mapping of phrase to {code: translation}. Defaults to
                the built-in phrases.
        """
        source = BUILTIN_PHRASES if phrases is None else phrases
        self.phrases = {text.strip(): dict(targets) for text, targets in source.items()}

    @classmethod
    def from_file(cls, path: Path, include_builtin: bool = True) -> "PhraseBook":
        """Load phrases from a JSON object of {"phrase": {"code": "text"}}.

        Raises:
            ConfigError: If the file cannot be read or has the wrong shape.
        """
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"cannot load phrase book {path}: {e}")

        if not isinstance(data, dict) or not all(
            isinstance(targets, dict) for targets in data.values()
        ):
            raise ConfigError(f"phrase book {path} must map phrases to objects")

        book = cls() if include_builtin else cls({})
        book.update(data)
        return book

    def update(self, phrases: dict[str, dict[str, str]]) -> None:
        """Merge phrases, overriding existing translations."""
        for text, targets in phrases.items():
            self.phrases.setdefault(text.strip(), {}).update(targets)

    def lookup(self, text: str, target: str) -> Optional[str]:
        """Return the stored translation of `text` into `target`, if any."""
        targets = self.phrases.get(text.strip())
        if not targets:
            return None
        return targets.get(target)
