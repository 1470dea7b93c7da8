"""Canonical event model shared by every agent adapter."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import time
from typing import Any
import uuid

from agentwire.core.types import AGENT_KINDS, EVENT_TYPES, PAYLOAD_FIELDS

_MISSING = object()


@dataclass(slots=True)
class CanonicalEvent:
    """A single normalized event emitted for one agent session."""

    id: str
    source: str
    session_id: str
    timestamp: int
    sequence: int
    type: str
    payload: dict[str, Any] = field(default_factory=dict)
    raw: Any = _MISSING

    def __post_init__(self) -> None:
        if self.type not in EVENT_TYPES:
            raise ValueError(f"Unsupported event type: {self.type}")
        if self.source not in AGENT_KINDS:
            raise ValueError(f"Unsupported event source: {self.source}")
        unexpected = set(self.payload) - PAYLOAD_FIELDS[self.type]
        if unexpected:
            raise ValueError(
                f"Payload fields not allowed for {self.type}: {', '.join(sorted(unexpected))}"
            )

    @property
    def has_raw(self) -> bool:
        return self.raw is not _MISSING

    def to_dict(self) -> dict[str, Any]:
        payload = {
            "id": self.id,
            "source": self.source,
            "sessionId": self.session_id,
            "timestamp": self.timestamp,
            "sequence": self.sequence,
            "type": self.type,
            "payload": dict(self.payload),
        }
        if self.has_raw:
            payload["raw"] = self.raw
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=True, separators=(",", ":"))

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "CanonicalEvent":
        """Rebuild an event from its wire form, e.g. one item popped off a queue."""
        return cls(
            id=raw["id"],
            source=raw["source"],
            session_id=raw["sessionId"],
            timestamp=int(raw["timestamp"]),
            sequence=int(raw["sequence"]),
            type=raw["type"],
            payload=dict(raw.get("payload", {})),
            raw=raw.get("raw", _MISSING),
        )


def make_event(
    event_type: str,
    payload: dict[str, Any] | None,
    *,
    source: str,
    session_id: str,
    sequence: int,
) -> CanonicalEvent:
    """Stamp a new event with a fresh id and the current wall-clock time.

    Payload entries whose value is ``None`` are dropped so that absent native
    fields never surface as ``null`` on the wire.
    """
    cleaned = {key: value for key, value in (payload or {}).items() if value is not None}
    return CanonicalEvent(
        id=str(uuid.uuid4()),
        source=source,
        session_id=session_id,
        timestamp=int(time.time() * 1000),
        sequence=sequence,
        type=event_type,
        payload=cleaned,
    )
