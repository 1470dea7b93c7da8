from __future__ import annotations

import logging

import pytest

from agentwire.config import AgentWireConfig, load_config
from agentwire.exceptions import ConfigError


def test_load_config_defaults_with_empty_environment() -> None:
    config = load_config({})

    assert config == AgentWireConfig()
    assert config.redis_url == "redis://localhost:6379"
    assert config.redis_queue_prefix == "agentwire:stream"
    assert config.redis_queue_ttl == 3600
    assert config.redis_max_retries == 3
    assert config.redis_retry_delay == 1000
    assert config.default_agent == "claude"
    assert config.default_timeout == 300
    assert config.log_level == "info"
    assert config.include_raw is False


def test_load_config_reads_process_environment(monkeypatch) -> None:
    monkeypatch.setenv("REDIS_URL", "redis://test:6379")
    monkeypatch.setenv("REDIS_QUEUE_PREFIX", "custom:prefix")
    monkeypatch.setenv("AGENTWIRE_CLAUDE_BIN", "/usr/bin/claude-custom")
    monkeypatch.setenv("AGENTWIRE_GEMINI_BIN", "/usr/bin/gemini-custom")
    monkeypatch.setenv("AGENTWIRE_CODEX_BIN", "/usr/bin/codex-custom")
    monkeypatch.setenv("AGENTWIRE_DEFAULT_AGENT", "Gemini")
    monkeypatch.setenv("AGENTWIRE_DEFAULT_TIMEOUT", "600")
    monkeypatch.setenv("AGENTWIRE_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("AGENTWIRE_INCLUDE_RAW", "true")

    config = load_config()

    assert config.redis_url == "redis://test:6379"
    assert config.redis_queue_prefix == "custom:prefix"
    assert config.executable_for("claude") == "/usr/bin/claude-custom"
    assert config.executable_for("gemini") == "/usr/bin/gemini-custom"
    assert config.executable_for("codex") == "/usr/bin/codex-custom"
    assert config.default_agent == "gemini"
    assert config.default_timeout == 600
    assert config.log_level == "debug"
    assert config.logging_level == logging.DEBUG
    assert config.include_raw is True


def test_load_config_parses_numbers() -> None:
    config = load_config(
        {
            "REDIS_QUEUE_TTL": "7200",
            "REDIS_MAX_RETRIES": "5",
            "REDIS_RETRY_DELAY": "2000",
            "AGENTWIRE_DEFAULT_TIMEOUT": "450.0",
        }
    )

    assert config.redis_queue_ttl == 7200
    assert config.redis_max_retries == 5
    assert config.redis_retry_delay == 2000
    assert config.default_timeout == 450


@pytest.mark.parametrize("value", ["abc", "1.5", "nan"])
def test_load_config_rejects_invalid_numbers(value: str) -> None:
    with pytest.raises(ConfigError, match="Invalid REDIS_QUEUE_TTL"):
        load_config({"REDIS_QUEUE_TTL": value})


@pytest.mark.parametrize(
    ("value", "expected"),
    [("true", True), ("TRUE", True), ("1", True), ("false", False), ("0", False), ("yes", False), ("", False)],
)
def test_load_config_parses_booleans(value: str, expected: bool) -> None:
    assert load_config({"AGENTWIRE_INCLUDE_RAW": value}).include_raw is expected


@pytest.mark.parametrize("agent", ["claude", "gemini", "codex"])
def test_load_config_accepts_known_agents(agent: str) -> None:
    assert load_config({"AGENTWIRE_DEFAULT_AGENT": agent}).default_agent == agent


def test_load_config_rejects_unknown_agent() -> None:
    with pytest.raises(ConfigError, match="Invalid AGENTWIRE_DEFAULT_AGENT"):
        load_config({"AGENTWIRE_DEFAULT_AGENT": "copilot"})


@pytest.mark.parametrize(
    ("value", "level"),
    [("debug", logging.DEBUG), ("info", logging.INFO), ("warn", logging.WARNING), ("error", logging.ERROR)],
)
def test_load_config_maps_log_levels(value: str, level: int) -> None:
    assert load_config({"AGENTWIRE_LOG_LEVEL": value}).logging_level == level


def test_load_config_rejects_unknown_log_level() -> None:
    with pytest.raises(ConfigError, match="Invalid AGENTWIRE_LOG_LEVEL"):
        load_config({"AGENTWIRE_LOG_LEVEL": "verbose"})
