from __future__ import annotations

import json
import logging

import pytest
import redis

from agentwire.agents import GeminiAgentAdapter
from agentwire.config import AgentWireConfig
from agentwire.core import make_event
from agentwire.exceptions import SinkError
from agentwire.sinks import RedisQueueSink, StdoutSink, create_redis_client, queue_key


class _RecordingRedis:
    def __init__(self, *, fail_push: bool = False, fail_expire: bool = False) -> None:
        self.lists: dict[str, list[str]] = {}
        self.expirations: list[tuple[str, int]] = []
        self.closed = False
        self._fail_push = fail_push
        self._fail_expire = fail_expire

    def rpush(self, key: str, value: str) -> int:
        if self._fail_push:
            raise redis.ConnectionError("connection refused")
        self.lists.setdefault(key, []).append(value)
        return len(self.lists[key])

    def expire(self, key: str, seconds: int) -> bool:
        if self._fail_expire:
            raise redis.ResponseError("READONLY")
        self.expirations.append((key, seconds))
        return True

    def close(self) -> None:
        self.closed = True


def _event(session_id: str = "session-1", sequence: int = 0):
    return make_event(
        "message.delta",
        {"content": "hi"},
        source="claude",
        session_id=session_id,
        sequence=sequence,
    )


def test_queue_key_joins_prefix_and_session() -> None:
    assert queue_key("agentwire:stream", "abc") == "agentwire:stream:abc"


def test_redis_sink_pushes_json_lines_in_order_and_sets_ttl_once() -> None:
    client = _RecordingRedis()
    sink = RedisQueueSink(client, queue_prefix="prefix", queue_ttl=60)

    for sequence in range(3):
        sink.publish(_event(sequence=sequence))
    sink.close()

    stored = [json.loads(item) for item in client.lists["prefix:session-1"]]
    assert [item["sequence"] for item in stored] == [0, 1, 2]
    assert client.expirations == [("prefix:session-1", 60)]
    assert client.closed is True


def test_redis_sink_skips_ttl_when_disabled() -> None:
    client = _RecordingRedis()
    sink = RedisQueueSink(client, queue_prefix="prefix", queue_ttl=0)

    sink.publish(_event())

    assert client.expirations == []


def test_redis_sink_wraps_push_failures() -> None:
    sink = RedisQueueSink(_RecordingRedis(fail_push=True), queue_prefix="prefix", queue_ttl=60)

    with pytest.raises(SinkError, match="Failed to publish event to Redis"):
        sink.publish(_event())


def test_redis_sink_logs_ttl_failures(caplog) -> None:
    client = _RecordingRedis(fail_expire=True)
    sink = RedisQueueSink(client, queue_prefix="prefix", queue_ttl=60)

    with caplog.at_level(logging.WARNING, logger="agentwire.sinks.redis_queue"):
        sink.publish(_event())

    assert len(client.lists["prefix:session-1"]) == 1
    assert "Failed to set TTL" in caplog.text


def test_create_redis_client_does_not_connect_eagerly() -> None:
    client = create_redis_client(AgentWireConfig(redis_url="redis://127.0.0.1:1/0"))
    try:
        assert isinstance(client, redis.Redis)
    finally:
        client.close()


def test_stdout_sink_writes_one_line_per_event(capsys) -> None:
    sink = StdoutSink()

    sink.publish(_event(sequence=0))
    sink.publish(_event(sequence=1))
    sink.close()

    lines = capsys.readouterr().out.splitlines()
    assert [json.loads(line)["sequence"] for line in lines] == [0, 1]


def test_stdout_sink_writes_lone_surrogate_content_as_escape(capsys) -> None:
    adapter = GeminiAgentAdapter()
    event = adapter.normalize(
        json.loads('{"type": "message", "content": "a\\ud800b"}'),
        session_id="session-1",
        sequence=0,
    )

    StdoutSink().publish(event)

    line = capsys.readouterr().out.strip()
    assert "\\ud800" in line
    assert json.loads(line)["payload"]["content"] == "a\ud800b"


def test_redis_sink_pushes_utf8_encodable_lines() -> None:
    client = _RecordingRedis()
    sink = RedisQueueSink(client, queue_prefix="prefix")
    event = make_event(
        "message.delta",
        json.loads('{"content": "x\\udfffy"}'),
        source="gemini",
        session_id="session-1",
        sequence=0,
    )

    sink.publish(event)

    client.lists["prefix:session-1"][0].encode("utf-8")
