"""Canonical event schema for agentwire."""

from agentwire.core.models import CanonicalEvent, make_event
from agentwire.core.types import (
    AGENT_KINDS,
    EVENT_TYPES,
    PAYLOAD_FIELDS,
    AgentKind,
    EventType,
)

__all__ = [
    "AGENT_KINDS",
    "AgentKind",
    "CanonicalEvent",
    "EVENT_TYPES",
    "EventType",
    "PAYLOAD_FIELDS",
    "make_event",
]
