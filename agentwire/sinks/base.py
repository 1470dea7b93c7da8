"""Event sink contract."""

from __future__ import annotations

from typing import Protocol

from agentwire.core.models import CanonicalEvent


class EventSink(Protocol):
    """Protocol for destinations that receive canonical events in order."""

    def publish(self, event: CanonicalEvent) -> None:
        """Deliver one event."""

    def close(self) -> None:
        """Release sink resources."""
