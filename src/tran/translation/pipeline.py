"""Sequential chunk-by-chunk translation of text streams."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, TextIO

from .reader import ChunkedReader

logger = logging.getLogger(__name__)

TranslateFunc = Callable[[str, str, str], str]
ChunkCallback = Callable[[int, int], None]


@dataclass
class PipelineResult:
    """Result of translating one stream.

    Attributes:
        chunks: Number of chunks translated and written.
        chars: Number of source characters translated, newlines excluded.
    """
    chunks: int = 0
    chars: int = 0


class TranslationPipeline:
    """Feeds chunks of a stream through a translate function in order."""

    def __init__(self, translate: TranslateFunc, limit: int):
        """Initialize the pipeline.

        Args:
            translate: Callable of (text, source, target) returning text.
            limit: Character limit per chunk.
        """
        self.translate = translate
        self.limit = limit

    def run(
        self,
        stream: TextIO,
        out: TextIO,
        source: str,
        target: str,
        on_chunk: Optional[ChunkCallback] = None
    ) -> PipelineResult:
        """Translate `stream` into `out`.

        Each translation is written before the next chunk is read. The first
        error raised by the translate function stops the run and propagates;
        output already written is kept.

        Args:
            stream: Source text stream.
            out: Sink for translated text.
            source: Source language code.
            target: Target language code.
            on_chunk: Optional callback called with (chunk_number, chunk_size)
                after each chunk is written.

        Returns:
            PipelineResult with counts for the stream.
        """
        result = PipelineResult()
        for chunk in ChunkedReader(stream, self.limit):
            logger.debug(
                "Translating chunk %d (%d lines, %d chars) %s -> %s",
                result.chunks + 1, len(chunk.lines), chunk.size, source, target
            )
            translated = self.translate(chunk.text, source, target)
            # Keep the line boundary between consecutive chunks.
            if not translated.endswith("\n"):
                translated += "\n"
            out.write(translated)
            out.flush()

            result.chunks += 1
            result.chars += chunk.size
            if on_chunk:
                on_chunk(result.chunks, chunk.size)
        return result
