"""Translation engine, chunking and pipelines."""

from .engine import TranslationEngine, OllamaBackend, EndpointBackend
from .reader import Chunk, ChunkedReader
from .pipeline import TranslationPipeline, PipelineResult
from .phrases import PhraseBook

__all__ = [
    "TranslationEngine",
    "OllamaBackend",
    "EndpointBackend",
    "Chunk",
    "ChunkedReader",
    "TranslationPipeline",
    "PipelineResult",
    "PhraseBook",
]
