"""Batch translation of files and standard input."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, TextIO

from ..errors import StreamOpenError, TranError
from ..translation import TranslationPipeline

logger = logging.getLogger(__name__)

STDIN_NAME = "<stdin>"


@dataclass
class FileReport:
    """Report of translating one input.

    Attributes:
        path: Input path, or "<stdin>".
        chunks: Number of chunks written.
        error: Error message if translation stopped early.
    """
    path: str
    chunks: int = 0
    error: Optional[str] = None


@dataclass
class BatchReport:
    """Report of a batch run.

    Attributes:
        files: Per-input reports, in processing order.
    """
    files: list[FileReport] = field(default_factory=list)

    @property
    def failed(self) -> list[FileReport]:
        return [report for report in self.files if report.error]

    @property
    def ok(self) -> bool:
        return not self.failed


ErrorCallback = Callable[[FileReport], None]


class BatchService:
    """Translates inputs one after another through a pipeline."""

    def __init__(self, pipeline: TranslationPipeline, source: str, target: str):
        """Initialize the batch service.

        Args:
            pipeline: Pipeline used for every input.
            source: Source language code.
            target: Target language code.
        """
        self.pipeline = pipeline
        self.source = source
        self.target = target

    def translate_stream(self, stream: TextIO, out: TextIO, name: str = STDIN_NAME) -> FileReport:
        """Translate one already-open stream.

        A backend error is recorded in the report rather than raised.
        """
        report = FileReport(path=name)

        def count(number: int, size: int):
            report.chunks = number

        logger.debug("Translating %s (%s -> %s)", name, self.source, self.target)
        try:
            self.pipeline.run(stream, out, self.source, self.target, on_chunk=count)
        except (TranError, UnicodeDecodeError) as e:
            logger.debug("Stopped %s after %d chunks: %s", name, report.chunks, e)
            report.error = str(e)
        return report

    def translate_files(
        self,
        paths: list[Path],
        out: TextIO,
        on_error: Optional[ErrorCallback] = None
    ) -> BatchReport:
        """Translate files strictly in order.

        A file whose translation fails is reported and the next file is
        still translated.

        Args:
            paths: Input files.
            out: Sink shared by every file.
            on_error: Optional callback for each failed file, called as soon
                as it fails.

        Returns:
            BatchReport with one entry per file processed.

        Raises:
            StreamOpenError: If a file cannot be opened. Files after it are
                not processed.
        """
        batch = BatchReport()
        for path in paths:
            try:
                stream = open(path, encoding="utf-8")
            except OSError as e:
                raise StreamOpenError(str(path), e.strerror or str(e))

            with stream:
                report = self.translate_stream(stream, out, name=str(path))
            batch.files.append(report)
            if report.error and on_error:
                on_error(report)
        return batch
