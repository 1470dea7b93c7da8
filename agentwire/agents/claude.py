"""Claude Code agent adapter (``--output-format stream-json``)."""

from __future__ import annotations

from typing import Any

from agentwire.agents.arguments import split_extra_args
from agentwire.agents.base import (
    AgentAdapter,
    emit,
    first_text,
    int_field,
    mapping_field,
    native_type,
    text_field,
)
from agentwire.core.models import CanonicalEvent

UNKNOWN_ERROR_CODE = "UNKNOWN_ERROR"
UNKNOWN_ERROR_MESSAGE = "An error occurred"


class ClaudeAgentAdapter(AgentAdapter):
    """Adapter for Claude Code headless streaming output."""

    name = "claude"

    def __init__(self, executable: str | None = None) -> None:
        self.executable = executable or "claude"

    def build_invocation(
        self,
        task: str,
        working_directory: str,
        extra_args: str | None = None,
        *,
        auto_approve: bool = True,
    ) -> list[str]:
        # Claude Code has no working directory flag; the runner spawns in it.
        command = [self.executable]
        if auto_approve:
            command.append("--dangerously-skip-permissions")
        command.extend(["--output-format", "stream-json", "--verbose"])
        command.extend(["-p", task])
        command.extend(split_extra_args(extra_args))
        return command

    def normalize(
        self,
        record: Any,
        *,
        session_id: str,
        sequence: int,
    ) -> CanonicalEvent | None:
        event_type = native_type(record)
        if event_type is None:
            return None

        if event_type == "system":
            payload = {"systemMessage": first_text(record, "message", "content")}
            return emit(self, "system", payload, session_id=session_id, sequence=sequence)
        if event_type == "assistant":
            return emit(
                self,
                "message.start",
                {"role": "assistant"},
                session_id=session_id,
                sequence=sequence,
            )
        if event_type == "content_block_start":
            return self._normalize_block_start(record, session_id=session_id, sequence=sequence)
        if event_type == "content_block_delta":
            delta = mapping_field(record, "delta")
            return emit(
                self,
                "message.delta",
                {"content": text_field(delta, "text")},
                session_id=session_id,
                sequence=sequence,
            )
        if event_type == "content_block_stop":
            # Tool blocks and text blocks both close as message.end.
            return emit(self, "message.end", session_id=session_id, sequence=sequence)
        if event_type == "result":
            return emit(
                self,
                "session.end",
                {
                    "exitCode": int_field(record, "exit_code"),
                    "durationMs": int_field(record, "duration_ms"),
                },
                session_id=session_id,
                sequence=sequence,
            )
        if event_type == "error":
            error = mapping_field(record, "error")
            payload = {
                "errorCode": _error_code(error),
                "errorMessage": (
                    text_field(error, "message")
                    or text_field(record, "message")
                    or UNKNOWN_ERROR_MESSAGE
                ),
            }
            return emit(self, "error", payload, session_id=session_id, sequence=sequence)
        return None

    def _normalize_block_start(
        self,
        record: dict[str, Any],
        *,
        session_id: str,
        sequence: int,
    ) -> CanonicalEvent | None:
        block = mapping_field(record, "content_block")
        block_type = native_type(block)
        if block_type == "text":
            return emit(
                self,
                "message.delta",
                {"content": text_field(block, "text")},
                session_id=session_id,
                sequence=sequence,
            )
        if block_type == "tool_use":
            return emit(
                self,
                "tool.start",
                {
                    "toolName": text_field(block, "name"),
                    "toolId": text_field(block, "id"),
                    "toolInput": mapping_field(block, "input"),
                },
                session_id=session_id,
                sequence=sequence,
            )
        return None


def _error_code(error: dict[str, Any] | None) -> str:
    # Native codes arrive as strings or HTTP-style integers.
    code = None if error is None else error.get("code")
    if isinstance(code, bool):
        return UNKNOWN_ERROR_CODE
    if isinstance(code, int):
        return str(code) if code else UNKNOWN_ERROR_CODE
    if isinstance(code, str) and code:
        return code
    return UNKNOWN_ERROR_CODE
