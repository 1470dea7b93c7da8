"""Destinations for canonical events."""

from agentwire.sinks.base import EventSink
from agentwire.sinks.redis_queue import RedisQueueSink, create_redis_client, queue_key
from agentwire.sinks.stdout import StdoutSink

__all__ = [
    "EventSink",
    "RedisQueueSink",
    "StdoutSink",
    "create_redis_client",
    "queue_key",
]
