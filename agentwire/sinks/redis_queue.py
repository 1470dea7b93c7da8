"""Redis list sink: one queue per session."""

from __future__ import annotations

import logging
from typing import Any

import redis
from redis.backoff import ExponentialBackoff
from redis.retry import Retry

from agentwire.config import AgentWireConfig
from agentwire.core.models import CanonicalEvent
from agentwire.exceptions import SinkError
from agentwire.sinks.base import EventSink

logger = logging.getLogger(__name__)

_MAX_BACKOFF_SECONDS = 10.0


def queue_key(prefix: str, session_id: str) -> str:
    return f"{prefix}:{session_id}"


def create_redis_client(config: AgentWireConfig) -> redis.Redis:
    """Build a client with exponential backoff bounded by the configured retries."""
    retry = Retry(
        ExponentialBackoff(
            cap=_MAX_BACKOFF_SECONDS,
            base=max(config.redis_retry_delay, 0) / 1000.0,
        ),
        max(config.redis_max_retries, 0),
    )
    return redis.Redis.from_url(
        config.redis_url,
        retry=retry,
        retry_on_error=[redis.ConnectionError, redis.TimeoutError],
        socket_connect_timeout=5.0,
    )


class RedisQueueSink(EventSink):
    """RPUSH each event onto ``<prefix>:<sessionId>``."""

    def __init__(self, client: Any, *, queue_prefix: str, queue_ttl: int = 0) -> None:
        self._client = client
        self._queue_prefix = queue_prefix
        self._queue_ttl = queue_ttl
        self._expiring: set[str] = set()

    def queue_key(self, session_id: str) -> str:
        return queue_key(self._queue_prefix, session_id)

    def publish(self, event: CanonicalEvent) -> None:
        key = self.queue_key(event.session_id)
        try:
            self._client.rpush(key, event.to_json())
        except redis.RedisError as error:
            raise SinkError(f"Failed to publish event to Redis: {error}") from error

        if key not in self._expiring:
            self._expiring.add(key)
            self._set_ttl(key)

    def _set_ttl(self, key: str) -> None:
        if self._queue_ttl <= 0:
            return
        try:
            self._client.expire(key, self._queue_ttl)
        except redis.RedisError as error:
            logger.warning(f"Failed to set TTL on {key}: {error}")

    def close(self) -> None:
        try:
            self._client.close()
        except redis.RedisError as error:
            logger.warning(f"Error closing Redis connection: {error}")
