"""Sequence-owning wrapper around an agent adapter."""

from __future__ import annotations

from typing import Any

from agentwire.agents.base import AgentAdapter, emit
from agentwire.core.models import CanonicalEvent


class EventNormalizer:
    """Normalize native records for one session with a gapless sequence.

    The counter advances only when an event is actually produced, so records
    that normalize to nothing never leave holes. Caller-side bracket events
    (``session.start`` / ``session.end``) go through :meth:`synthesize` and
    share the same counter.
    """

    def __init__(
        self,
        adapter: AgentAdapter,
        session_id: str,
        *,
        include_raw: bool = False,
    ) -> None:
        self.adapter = adapter
        self.session_id = session_id
        self.include_raw = include_raw
        self._next_sequence = 0

    @property
    def next_sequence(self) -> int:
        return self._next_sequence

    def normalize(self, record: Any) -> CanonicalEvent | None:
        event = self.adapter.normalize(
            record,
            session_id=self.session_id,
            sequence=self._next_sequence,
        )
        if event is None:
            return None
        if self.include_raw:
            event.raw = record
        self._next_sequence += 1
        return event

    def synthesize(
        self,
        event_type: str,
        payload: dict[str, Any] | None = None,
    ) -> CanonicalEvent:
        event = emit(
            self.adapter,
            event_type,
            payload,
            session_id=self.session_id,
            sequence=self._next_sequence,
        )
        self._next_sequence += 1
        return event
