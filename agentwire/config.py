"""Environment configuration for agentwire."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import logging
import os

from agentwire.core.types import AGENT_KINDS
from agentwire.exceptions import ConfigError

LOG_LEVELS: tuple[str, ...] = ("debug", "info", "warn", "error")

_LOGGING_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}
_TRUE_VALUES = {"true", "1"}
_FALSE_VALUES = {"false", "0"}


@dataclass(frozen=True, slots=True)
class AgentWireConfig:
    """Resolved runtime settings."""

    redis_url: str = "redis://localhost:6379"
    redis_queue_prefix: str = "agentwire:stream"
    redis_queue_ttl: int = 3600
    redis_max_retries: int = 3
    redis_retry_delay: int = 1000
    claude_bin: str = "claude"
    gemini_bin: str = "gemini"
    codex_bin: str = "codex"
    default_agent: str = "claude"
    default_timeout: int = 300
    log_level: str = "info"
    include_raw: bool = False

    def executable_for(self, agent: str) -> str:
        return {
            "claude": self.claude_bin,
            "gemini": self.gemini_bin,
            "codex": self.codex_bin,
        }[agent]

    @property
    def logging_level(self) -> int:
        return _LOGGING_LEVELS[self.log_level]


def load_config(environ: Mapping[str, str] | None = None) -> AgentWireConfig:
    """Load settings from ``environ`` (defaults to the process environment)."""
    env = os.environ if environ is None else environ
    defaults = AgentWireConfig()
    return AgentWireConfig(
        redis_url=_string(env, "REDIS_URL", defaults.redis_url),
        redis_queue_prefix=_string(env, "REDIS_QUEUE_PREFIX", defaults.redis_queue_prefix),
        redis_queue_ttl=_integer(env, "REDIS_QUEUE_TTL", defaults.redis_queue_ttl),
        redis_max_retries=_integer(env, "REDIS_MAX_RETRIES", defaults.redis_max_retries),
        redis_retry_delay=_integer(env, "REDIS_RETRY_DELAY", defaults.redis_retry_delay),
        claude_bin=_string(env, "AGENTWIRE_CLAUDE_BIN", defaults.claude_bin),
        gemini_bin=_string(env, "AGENTWIRE_GEMINI_BIN", defaults.gemini_bin),
        codex_bin=_string(env, "AGENTWIRE_CODEX_BIN", defaults.codex_bin),
        default_agent=_choice(
            env, "AGENTWIRE_DEFAULT_AGENT", defaults.default_agent, AGENT_KINDS
        ),
        default_timeout=_integer(env, "AGENTWIRE_DEFAULT_TIMEOUT", defaults.default_timeout),
        log_level=_choice(env, "AGENTWIRE_LOG_LEVEL", defaults.log_level, LOG_LEVELS),
        include_raw=_boolean(env, "AGENTWIRE_INCLUDE_RAW", defaults.include_raw),
    )


def _string(env: Mapping[str, str], key: str, default: str) -> str:
    value = env.get(key, "").strip()
    return value or default


def _integer(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key, "").strip()
    if not raw:
        return default
    try:
        parsed = float(raw)
    except ValueError as error:
        raise ConfigError(f"Invalid {key}: expected number, got {raw!r}") from error
    if not parsed.is_integer():
        raise ConfigError(f"Invalid {key}: expected whole number, got {raw!r}")
    return int(parsed)


def _boolean(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = env.get(key, "").strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    return default


def _choice(
    env: Mapping[str, str],
    key: str,
    default: str,
    choices: tuple[str, ...],
) -> str:
    raw = env.get(key, "").strip()
    if not raw:
        return default
    normalized = raw.lower()
    if normalized not in choices:
        raise ConfigError(
            f"Invalid {key}: expected one of {', '.join(choices)}, got {raw!r}"
        )
    return normalized
