"""Codex CLI agent adapter (``codex exec --json``)."""

from __future__ import annotations

from typing import Any

from agentwire.agents.arguments import split_extra_args
from agentwire.agents.base import (
    AgentAdapter,
    emit,
    int_field,
    mapping_field,
    native_type,
    text_field,
)
from agentwire.core.models import CanonicalEvent

TURN_FAILED_CODE = "TURN_FAILED"
TURN_FAILED_MESSAGE = "Turn failed"
AGENT_ERROR_CODE = "AGENT_ERROR"
AGENT_ERROR_MESSAGE = "Unknown error"


class CodexAgentAdapter(AgentAdapter):
    """Adapter for codex-style command execution and event parsing."""

    name = "codex"

    def __init__(self, executable: str | None = None) -> None:
        self.executable = executable or "codex"

    def build_invocation(
        self,
        task: str,
        working_directory: str,
        extra_args: str | None = None,
        *,
        auto_approve: bool = True,
    ) -> list[str]:
        command = [self.executable, "exec"]
        if auto_approve:
            command.append("--yolo")
        command.append("--json")
        command.extend(["--cwd", working_directory])
        command.extend(split_extra_args(extra_args))
        command.append(task)
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

        canonical = _map_codex_event(event_type, record)
        if canonical is None:
            return None
        canonical_type, payload = canonical
        return emit(self, canonical_type, payload, session_id=session_id, sequence=sequence)


def _map_codex_event(
    event_type: str,
    record: dict[str, Any],
) -> tuple[str, dict[str, Any]] | None:
    if event_type == "thread.started":
        return "session.start", {}
    if event_type == "turn.started":
        return "message.start", {"role": "assistant"}
    if event_type == "item.message":
        content = _join_content_text(record.get("content"))
        if not content:
            return None
        return "message.delta", {"content": content}
    if event_type == "item.reasoning":
        reasoning = text_field(record, "content")
        if reasoning is None:
            return None
        return "thinking.delta", {"content": reasoning}
    if event_type == "item.command_execution":
        command = text_field(record, "command")
        if command is None:
            return None
        return "tool.end", {
            "toolName": "bash",
            "toolInput": {"command": command},
            "toolOutput": text_field(record, "output"),
            "toolExitCode": int_field(record, "exit_code"),
        }
    if event_type == "item.file_change":
        path = text_field(record, "path")
        if path is None:
            return None
        return "tool.end", {
            "toolName": "file_edit",
            "toolInput": {"path": path},
            "toolOutput": text_field(record, "diff"),
        }
    if event_type == "turn.completed":
        return "message.end", {}
    if event_type == "turn.failed":
        return "error", {
            "errorCode": TURN_FAILED_CODE,
            "errorMessage": _failure_message(record) or TURN_FAILED_MESSAGE,
        }
    if event_type == "error":
        return "error", {
            "errorCode": AGENT_ERROR_CODE,
            "errorMessage": text_field(record, "message") or AGENT_ERROR_MESSAGE,
        }
    return None


def _join_content_text(content: Any) -> str:
    if not isinstance(content, list):
        return ""
    parts: list[str] = []
    for block in content:
        if not isinstance(block, dict):
            continue
        text = block.get("text")
        if isinstance(text, str):
            parts.append(text)
    return "".join(parts)


def _failure_message(record: dict[str, Any]) -> str | None:
    error = record.get("error")
    if isinstance(error, str):
        return error
    return text_field(mapping_field(record, "error"), "message")
