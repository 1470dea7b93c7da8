"""Chunk-in / events-out composition of the streaming pipeline."""

from __future__ import annotations

from agentwire.agents.base import AgentAdapter
from agentwire.core.models import CanonicalEvent
from agentwire.stream.decoder import decode_record
from agentwire.stream.normalizer import EventNormalizer
from agentwire.stream.reassembler import LineReassembler


class StreamProcessor:
    """Turn raw stdout text of one agent run into ordered canonical events."""

    def __init__(
        self,
        adapter: AgentAdapter,
        session_id: str,
        *,
        include_raw: bool = False,
    ) -> None:
        self.reassembler = LineReassembler()
        self.normalizer = EventNormalizer(adapter, session_id, include_raw=include_raw)

    def process_chunk(self, text: str) -> list[CanonicalEvent]:
        return self._normalize_records(self.reassembler.feed(text))

    def flush(self) -> list[CanonicalEvent]:
        """Drain the trailing unterminated record at end of stream."""
        return self._normalize_records(self.reassembler.drain())

    def _normalize_records(self, records: list[str]) -> list[CanonicalEvent]:
        events: list[CanonicalEvent] = []
        for record in records:
            ok, value = decode_record(record)
            if not ok:
                continue
            event = self.normalizer.normalize(value)
            if event is not None:
                events.append(event)
        return events
