from __future__ import annotations

import random

from agentwire.stream import LineReassembler


def test_reassembler_carries_partial_record_across_chunks() -> None:
    reassembler = LineReassembler()

    assert reassembler.feed('{"id":1}\n{"id":2}\n{"id":3') == ['{"id":1}', '{"id":2}']
    assert reassembler.pending == '{"id":3'
    assert reassembler.feed("}\n") == ['{"id":3}']
    assert reassembler.pending == ""


def test_reassembler_buffers_chunk_without_newline() -> None:
    reassembler = LineReassembler()
    big_chunk = "x" * 100_000

    assert reassembler.feed(big_chunk) == []
    assert reassembler.feed(big_chunk) == []
    assert reassembler.pending == big_chunk * 2


def test_reassembler_discards_blank_and_whitespace_records() -> None:
    reassembler = LineReassembler()

    records = reassembler.feed("\n\n  \nfirst\n\t\n\r\nsecond\r\n")

    assert records == ["first", "second"]


def test_reassembler_drain_returns_trailing_record_once() -> None:
    reassembler = LineReassembler()
    reassembler.feed("complete\n  trailing  ")

    assert reassembler.drain() == ["trailing"]
    assert reassembler.drain() == []
    assert reassembler.pending == ""


def test_reassembler_drain_ignores_whitespace_only_buffer() -> None:
    reassembler = LineReassembler()
    reassembler.feed("record\n   \t")

    assert reassembler.drain() == []
    assert reassembler.pending == ""


def test_reassembler_is_independent_of_chunk_boundaries() -> None:
    lines = [f'{{"index": {index}, "text": "line {index} \\u00e9"}}' for index in range(40)]
    text = "\n".join(lines) + "\n"

    whole = LineReassembler().feed(text)
    assert whole == lines

    rng = random.Random(20261017)
    for _ in range(50):
        reassembler = LineReassembler()
        records: list[str] = []
        position = 0
        while position < len(text):
            size = rng.randint(1, 17)
            records.extend(reassembler.feed(text[position : position + size]))
            position += size
        records.extend(reassembler.drain())
        assert records == whole
