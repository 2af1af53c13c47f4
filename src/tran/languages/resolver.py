"""Resolution of user-typed language identifiers to language codes."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional

from ..errors import LanguageNotFound
from .table import DEFAULT_TABLE, LanguageEntry, LanguageTable


@dataclass(frozen=True)
class ResolvedLanguage:
    """Result of resolving a query.

    Attributes:
        code: Canonical code as stored by the source that matched.
        name: English name of the language.
    """
    code: str
    name: str


class LanguageSource(ABC):
    """A set of languages that can be searched by code or name."""

    @abstractmethod
    def entries(self) -> Iterable[LanguageEntry]:
        """Return every entry in the order it should be searched."""
        pass

    def lookup_code(self, code: str) -> Optional[ResolvedLanguage]:
        """Find an entry whose code equals `code`, ignoring case."""
        code = code.lower()
        for entry in self.entries():
            if entry.code.lower() == code:
                return ResolvedLanguage(entry.code, entry.name)
        return None

    def find_name(self, fragment: str) -> Optional[ResolvedLanguage]:
        """Find the first entry whose name contains `fragment`, ignoring case."""
        fragment = fragment.lower()
        for entry in self.entries():
            if fragment in entry.name.lower():
                return ResolvedLanguage(entry.code, entry.name)
        return None

    def lookup(self, query: str) -> Optional[ResolvedLanguage]:
        """Exact code match first, then name substring match."""
        return self.lookup_code(query) or self.find_name(query)

    def list_matching(self, substring: str) -> list[LanguageEntry]:
        """Return entries whose code or name contains `substring`.

        An empty substring matches every entry.
        """
        substring = substring.lower()
        return [
            entry for entry in self.entries()
            if substring in entry.code.lower() or substring in entry.name.lower()
        ]


class TableLanguageSource(LanguageSource):
    """The compiled-in ISO-639-1 table."""

    def __init__(self, table: LanguageTable = DEFAULT_TABLE):
        self.table = table

    def entries(self) -> Iterable[LanguageEntry]:
        return self.table.all()

    def lookup_code(self, code: str) -> Optional[ResolvedLanguage]:
        name = self.table.lookup_exact(code)
        if name is None:
            return None
        return ResolvedLanguage(code.lower(), name)


class MappingLanguageSource(LanguageSource):
    """Languages from a plain mapping, e.g. a backend's supported list."""

    def __init__(self, names: dict[str, str]):
        self._entries = tuple(
            LanguageEntry(code, names[code])
            for code in sorted(names, key=str.lower)
        )

    def entries(self) -> Iterable[LanguageEntry]:
        return self._entries


class LanguageResolver:
    """Resolves queries against an ordered chain of sources.

    Earlier sources take priority: all sources are tried for an exact code
    match before any is searched by name, so a code is never shadowed by a
    name that happens to contain it.
    """

    def __init__(self, sources: Optional[list[LanguageSource]] = None):
        """Initialize the resolver.

        Args:
            sources: Sources in priority order. Defaults to the static table.
        """
        self.sources = sources or [TableLanguageSource()]

    @classmethod
    def with_external(
        cls,
        external: Optional[LanguageSource],
        table: LanguageTable = DEFAULT_TABLE
    ) -> "LanguageResolver":
        """Build a resolver that consults `external` before the static table."""
        sources: list[LanguageSource] = [TableLanguageSource(table)]
        if external is not None:
            sources.insert(0, external)
        return cls(sources)

    def resolve(self, query: str) -> ResolvedLanguage:
        """Resolve a code, full name, or name fragment.

        Args:
            query: User-typed language identifier.

        Returns:
            The matching language.

        Raises:
            LanguageNotFound: If no source matches.
        """
        normalized = query.strip().lower()
        if normalized:
            for source in self.sources:
                found = source.lookup_code(normalized)
                if found:
                    return found
            for source in self.sources:
                found = source.find_name(normalized)
                if found:
                    return found
        raise LanguageNotFound(query)

    def name_for(self, code: str) -> str:
        """Return the display name of a known code, or the code itself."""
        for source in self.sources:
            found = source.lookup_code(code)
            if found:
                return found.name
        return code

    def list_matching(self, substring: str = "") -> list[LanguageEntry]:
        """List matching entries from every source, sorted by code.

        When several sources know the same code, the earlier source wins.
        """
        merged: dict[str, LanguageEntry] = {}
        for source in self.sources:
            for entry in source.list_matching(substring):
                merged.setdefault(entry.code.lower(), entry)
        return [merged[key] for key in sorted(merged)]
