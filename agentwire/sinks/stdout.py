"""Console sink writing one NDJSON line per event."""

from __future__ import annotations

import typer

from agentwire.core.models import CanonicalEvent
from agentwire.sinks.base import EventSink


class StdoutSink(EventSink):
    """Emit events to stdout for piping without a Redis server."""

    def publish(self, event: CanonicalEvent) -> None:
        typer.echo(event.to_json(), color=False)

    def close(self) -> None:
        return
