from __future__ import annotations

import codecs
from typing import BinaryIO, Iterator, overload

NEW_LINE = "\n"


class LineStore:
    """An append-only sequence of lines, built from a byte stream.

    Data may be fed in chunks of any size; the result is the same as feeding
    the whole stream in one go.
    """

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._open = False
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> list[str]: ...

    def __getitem__(self, index: int | slice) -> str | list[str]:
        return self._lines[index]

    @property
    def lines(self) -> list[str]:
        """A copy of the lines."""
        return self._lines.copy()

    @property
    def open(self) -> bool:
        """Is the last line still open (i.e. not terminated by a new line)?"""
        return self._open

    def ingest(self, data: bytes) -> None:
        """Add a chunk of data.

        Args:
            data: Bytes from the stream.
        """
        self._add_text(self._decoder.decode(data))

    def finish(self) -> None:
        """Flush any partial UTF-8 sequence left at the end of the stream."""
        self._add_text(self._decoder.decode(b"", final=True))

    def read(self, input_file: BinaryIO, chunk_size: int = 64 * 1024) -> None:
        """Read a file until EOF.

        Args:
            input_file: A file opened in binary mode.
            chunk_size: Maximum number of bytes per read.
        """
        while data := input_file.read(chunk_size):
            self.ingest(data)
        self.finish()

    def _add_text(self, text: str) -> None:
        if not text:
            return
        *terminated, trailing = text.split(NEW_LINE)
        for segment in terminated:
            self._append(segment)
            self._open = False
        if trailing:
            self._append(trailing)
            self._open = True

    def _append(self, segment: str) -> None:
        if self._open:
            self._lines[-1] += segment
        else:
            self._lines.append(segment)
