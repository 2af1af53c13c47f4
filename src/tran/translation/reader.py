"""Line-aligned chunking of text streams."""

from dataclasses import dataclass
from typing import Iterator, Optional, TextIO


@dataclass(frozen=True)
class Chunk:
    """A contiguous run of lines from a stream.

    Attributes:
        lines: Lines without their line terminators.
    """
    lines: tuple[str, ...]

    @property
    def text(self) -> str:
        """The lines joined back together, each ending in a newline."""
        return "".join(f"{line}\n" for line in self.lines)

    @property
    def size(self) -> int:
        """Number of characters, not counting newlines."""
        return sum(len(line) for line in self.lines)


def _strip_terminator(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


class ChunkedReader:
    """Reads a stream as chunks bounded by a character limit.

    Lines are added to a chunk until its size reaches or exceeds the limit.
    A line is never split, so a single line longer than the limit forms a
    chunk of its own.
    """

    def __init__(self, stream: TextIO, limit: int):
        """Initialize the reader.

        Args:
            stream: Text stream to read lines from.
            limit: Character limit per chunk (at least 1).
        """
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        self.stream = stream
        self.limit = limit

    def next_chunk(self) -> Optional[Chunk]:
        """Read the next chunk.

        Returns:
            The next chunk, or None at end of stream.
        """
        lines = []
        count = 0
        while count < self.limit:
            line = self.stream.readline()
            if not line:
                break
            line = _strip_terminator(line)
            lines.append(line)
            count += len(line)
        if not lines:
            return None
        return Chunk(tuple(lines))

    def __iter__(self) -> Iterator[Chunk]:
        while True:
            chunk = self.next_chunk()
            if chunk is None:
                return
            yield chunk
