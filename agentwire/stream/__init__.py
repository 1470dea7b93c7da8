"""Streaming NDJSON ingestion and normalization."""

from agentwire.stream.decoder import decode_record
from agentwire.stream.normalizer import EventNormalizer
from agentwire.stream.processor import StreamProcessor
from agentwire.stream.reassembler import LineReassembler

__all__ = [
    "EventNormalizer",
    "LineReassembler",
    "StreamProcessor",
    "decode_record",
]
