"""Line sources and sinks the engine consumes.

A line source is any iterable of raw script lines. A line sink receives
output lines one at a time.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, TextIO

from fantasy_story.core.logging import get_logger


logger = get_logger(__name__)


class LineSink(Protocol):
    """Receiver of output lines."""

    def write_line(self, line: str) -> None: ...


@dataclass
class ListSink:
    """Collects output lines in memory."""

    lines: list[str] = field(default_factory=list)

    def write_line(self, line: str) -> None:
        self.lines.append(line)


class StreamSink:
    """Writes output lines to a text stream, one per line."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self.lines_written = 0

    def write_line(self, line: str) -> None:
        self._stream.write(f"{line}\n")
        self.lines_written += 1


def read_script(path: str | Path) -> Iterator[str]:
    """Lazily yield the lines of a script file without line terminators.

    Raises:
        OSError: If the file cannot be opened (raised on first iteration).
    """
    path = Path(path)
    logger.debug("Reading script", path=str(path))
    with path.open(encoding="utf-8") as handle:
        for line in handle:
            yield line.rstrip("\r\n")


@contextmanager
def open_sink(path: str | Path) -> Iterator[StreamSink]:
    """Open ``path`` for writing and yield a StreamSink over it."""
    path = Path(path)
    with path.open("w", encoding="utf-8") as handle:
        sink = StreamSink(handle)
        yield sink
    logger.debug("Output written", path=str(path), lines=sink.lines_written)


__all__ = [
    "LineSink",
    "ListSink",
    "StreamSink",
    "read_script",
    "open_sink",
]
