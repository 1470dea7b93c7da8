"""Closed agent adapter registry."""

from __future__ import annotations

from agentwire.agents.base import AgentAdapter
from agentwire.agents.claude import ClaudeAgentAdapter
from agentwire.agents.codex import CodexAgentAdapter
from agentwire.agents.gemini import GeminiAgentAdapter
from agentwire.exceptions import AgentRegistryError

_ADAPTER_CLASSES: dict[str, type[AgentAdapter]] = {
    "claude": ClaudeAgentAdapter,
    "gemini": GeminiAgentAdapter,
    "codex": CodexAgentAdapter,
}


def normalize_agent_key(key: str) -> str:
    return key.strip().lower()


def get_agent_adapter(key: str, *, executable: str | None = None) -> AgentAdapter:
    """Return a fresh adapter instance for ``key``."""
    normalized_key = normalize_agent_key(key)
    adapter_cls = _ADAPTER_CLASSES.get(normalized_key)
    if adapter_cls is None:
        raise AgentRegistryError(
            f"Unknown agent type: {normalized_key or key!r}. "
            f"Expected one of: {', '.join(list_agent_adapter_keys())}."
        )
    return adapter_cls(executable=executable)


def list_agent_adapter_keys() -> tuple[str, ...]:
    return tuple(sorted(_ADAPTER_CLASSES.keys()))
