from __future__ import annotations

import logging

from agentwire.stream import decode_record


def test_decode_record_returns_any_json_value() -> None:
    assert decode_record('{"type": "init"}') == (True, {"type": "init"})
    assert decode_record("[1, 2]") == (True, [1, 2])
    assert decode_record('"text"') == (True, "text")
    assert decode_record("null") == (True, None)


def test_decode_record_logs_and_skips_invalid_json(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="agentwire.stream.decoder"):
        ok, value = decode_record("{not json")

    assert ok is False
    assert value is None
    assert "Failed to decode record" in caplog.text
    assert "{not json" in caplog.text


def test_decode_record_truncates_long_records_in_diagnostics(caplog) -> None:
    record = "{" + "a" * 5000

    with caplog.at_level(logging.WARNING, logger="agentwire.stream.decoder"):
        ok, _ = decode_record(record)

    assert ok is False
    assert "a" * 5000 not in caplog.text
    assert "..." in caplog.text


def test_decode_record_survives_pathological_nesting() -> None:
    ok, value = decode_record("[" * 200_000)

    assert ok is False
    assert value is None


def test_decode_record_skips_integers_beyond_conversion_limit(caplog) -> None:
    record = '{"type": "result", "exit_code": ' + "1" * 5000 + "}"

    with caplog.at_level(logging.WARNING, logger="agentwire.stream.decoder"):
        ok, value = decode_record(record)

    assert ok is False
    assert value is None
    assert "Failed to decode record" in caplog.text
