"""Agent adapters mapping native NDJSON streams onto canonical events."""

from agentwire.agents.arguments import split_extra_args
from agentwire.agents.base import AgentAdapter
from agentwire.agents.claude import ClaudeAgentAdapter
from agentwire.agents.codex import CodexAgentAdapter
from agentwire.agents.gemini import GeminiAgentAdapter
from agentwire.agents.registry import (
    get_agent_adapter,
    list_agent_adapter_keys,
    normalize_agent_key,
)

__all__ = [
    "AgentAdapter",
    "ClaudeAgentAdapter",
    "CodexAgentAdapter",
    "GeminiAgentAdapter",
    "get_agent_adapter",
    "list_agent_adapter_keys",
    "normalize_agent_key",
    "split_extra_args",
]
