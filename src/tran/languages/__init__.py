"""Language table and resolution."""

from .table import DEFAULT_TABLE, ISO_639_1, LanguageEntry, LanguageTable
from .resolver import (
    LanguageResolver,
    LanguageSource,
    MappingLanguageSource,
    ResolvedLanguage,
    TableLanguageSource,
)

__all__ = [
    "DEFAULT_TABLE",
    "ISO_639_1",
    "LanguageEntry",
    "LanguageTable",
    "LanguageResolver",
    "LanguageSource",
    "MappingLanguageSource",
    "ResolvedLanguage",
    "TableLanguageSource",
]
