"""Newline framing for arbitrarily chunked text streams."""

from __future__ import annotations


class LineReassembler:
    """Accumulate text chunks and yield complete newline-terminated records.

    The reassembler knows nothing about JSON. Records are returned stripped of
    surrounding whitespace (which also removes ``\\r`` terminators) and blank
    records are discarded. The tail that has not seen a newline yet is kept as
    carry-over until the next :meth:`feed` or a final :meth:`drain`.
    """

    def __init__(self) -> None:
        self._buffer = ""

    @property
    def pending(self) -> str:
        return self._buffer

    def feed(self, chunk: str) -> list[str]:
        self._buffer += chunk
        segments = self._buffer.split("\n")
        self._buffer = segments.pop()

        records: list[str] = []
        for segment in segments:
            stripped = segment.strip()
            if not stripped:
                continue
            records.append(stripped)
        return records

    def drain(self) -> list[str]:
        remaining = self._buffer.strip()
        self._buffer = ""
        if not remaining:
            return []
        return [remaining]
