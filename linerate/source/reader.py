from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import BinaryIO

STDIN_PATH = "-"


@dataclass(frozen=True)
class ReadOutcome:
    """Result of one read attempt: a decoded line, end of input, or a failure.

    Failures are returned rather than raised so a bad line never ends the stream.
    """

    line: str | None = None
    error: Exception | None = None
    raw: bytes = b""

    @classmethod
    def ok(cls, line: str) -> "ReadOutcome":
        return cls(line=line)

    @classmethod
    def eof(cls) -> "ReadOutcome":
        return cls()

    @classmethod
    def failed(cls, error: Exception, raw: bytes = b"") -> "ReadOutcome":
        return cls(error=error, raw=raw)

    @property
    def is_eof(self) -> bool:
        return self.line is None and self.error is None


class LineSource:
    """A readable line source. Subclasses implement read_line()."""

    def read_line(self) -> ReadOutcome:
        raise NotImplementedError

    def close(self) -> None:
        pass

    def __enter__(self) -> "LineSource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class StreamSource(LineSource):
    """Reads newline-terminated lines from a binary stream, decoding each as UTF-8."""

    def __init__(self, stream: BinaryIO, encoding: str = "utf-8") -> None:
        self._stream = stream
        self._encoding = encoding

    def read_line(self) -> ReadOutcome:
        raw = self._stream.readline()
        if not raw:
            return ReadOutcome.eof()
        try:
            return ReadOutcome.ok(raw.decode(self._encoding))
        except UnicodeDecodeError as e:
            return ReadOutcome.failed(e, raw)

    def close(self) -> None:
        self._stream.close()


class FileSource(StreamSource):
    def __init__(self, path: str) -> None:
        # OSError from open() is left to the caller: a file that cannot be opened is fatal.
        super().__init__(open(path, "rb"))
        self.path = path


class StdinSource(StreamSource):
    def __init__(self) -> None:
        super().__init__(sys.stdin.buffer)

    def close(self) -> None:
        # stdin belongs to the process
        pass


def open_source(path: str) -> LineSource:
    """Select the source for `path`: "-" is standard input, anything else a file."""
    if path == STDIN_PATH:
        return StdinSource()
    return FileSource(path)
