"""Stream CLI coding-agent output as normalized events.

This module is the supported import path for library users.
"""

from agentwire.agents import (
    AgentAdapter,
    ClaudeAgentAdapter,
    CodexAgentAdapter,
    GeminiAgentAdapter,
    get_agent_adapter,
    list_agent_adapter_keys,
    split_extra_args,
)
from agentwire.config import AgentWireConfig, load_config
from agentwire.core import AGENT_KINDS, EVENT_TYPES, CanonicalEvent
from agentwire.exceptions import (
    AgentLaunchError,
    AgentRegistryError,
    AgentWireError,
    ConfigError,
    SinkError,
)
from agentwire.stream import EventNormalizer, LineReassembler, StreamProcessor, decode_record

__version__ = "0.1.0"

__all__ = [
    "AGENT_KINDS",
    "AgentAdapter",
    "AgentLaunchError",
    "AgentRegistryError",
    "AgentWireConfig",
    "AgentWireError",
    "CanonicalEvent",
    "ClaudeAgentAdapter",
    "CodexAgentAdapter",
    "ConfigError",
    "EVENT_TYPES",
    "EventNormalizer",
    "GeminiAgentAdapter",
    "LineReassembler",
    "SinkError",
    "StreamProcessor",
    "__version__",
    "decode_record",
    "get_agent_adapter",
    "list_agent_adapter_keys",
    "load_config",
    "split_extra_args",
]
