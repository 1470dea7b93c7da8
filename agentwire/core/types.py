"""Type definitions for the canonical event schema."""

from typing import Literal

AgentKind = Literal["claude", "gemini", "codex"]

AGENT_KINDS: tuple[str, ...] = ("claude", "gemini", "codex")

EventType = Literal[
    "session.start",
    "session.end",
    "message.start",
    "message.delta",
    "message.end",
    "tool.start",
    "tool.delta",
    "tool.end",
    "thinking.start",
    "thinking.delta",
    "thinking.end",
    "error",
    "system",
]

EVENT_TYPES: tuple[str, ...] = (
    "session.start",
    "session.end",
    "message.start",
    "message.delta",
    "message.end",
    "tool.start",
    "tool.delta",
    "tool.end",
    "thinking.start",
    "thinking.delta",
    "thinking.end",
    "error",
    "system",
)

# Payload keys meaningful for each event type.
PAYLOAD_FIELDS: dict[str, frozenset[str]] = {
    "session.start": frozenset(),
    "session.end": frozenset({"exitCode", "durationMs"}),
    "message.start": frozenset({"role"}),
    "message.delta": frozenset({"content", "role"}),
    "message.end": frozenset(),
    "tool.start": frozenset({"toolName", "toolId", "toolInput"}),
    "tool.delta": frozenset({"toolName", "toolId", "toolOutput"}),
    "tool.end": frozenset(
        {"toolName", "toolId", "toolInput", "toolOutput", "toolExitCode"}
    ),
    "thinking.start": frozenset(),
    "thinking.delta": frozenset({"content"}),
    "thinking.end": frozenset(),
    "error": frozenset({"errorCode", "errorMessage"}),
    "system": frozenset({"systemMessage"}),
}
