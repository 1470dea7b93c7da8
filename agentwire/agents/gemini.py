"""Gemini CLI agent adapter."""

from __future__ import annotations

from typing import Any

from agentwire.agents.arguments import split_extra_args
from agentwire.agents.base import (
    AgentAdapter,
    emit,
    mapping_field,
    native_type,
    text_field,
)
from agentwire.core.models import CanonicalEvent

GEMINI_ERROR_CODE = "GEMINI_ERROR"
GEMINI_ERROR_MESSAGE = "Unknown error"


class GeminiAgentAdapter(AgentAdapter):
    """Adapter for Gemini CLI in headless ``stream-json`` mode."""

    name = "gemini"

    def __init__(self, executable: str | None = None) -> None:
        self.executable = executable or "gemini"

    def build_invocation(
        self,
        task: str,
        working_directory: str,
        extra_args: str | None = None,
        *,
        auto_approve: bool = True,
    ) -> list[str]:
        command = [self.executable]
        if auto_approve:
            command.append("--yolo")
        command.extend(["--output-format", "stream-json"])
        if working_directory:
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
        if event_type == "init":
            payload: dict[str, Any] = {}
            canonical_type = "session.start"
        elif event_type == "message":
            payload = {"content": text_field(record, "content") or "", "role": "assistant"}
            canonical_type = "message.delta"
        elif event_type == "tool_call":
            payload = {
                "toolName": text_field(record, "name") or "",
                "toolInput": mapping_field(record, "input") or {},
            }
            canonical_type = "tool.start"
        elif event_type == "tool_result":
            payload = {"toolOutput": text_field(record, "output") or ""}
            canonical_type = "tool.end"
        elif event_type == "done":
            payload = {"exitCode": 0}
            canonical_type = "session.end"
        elif event_type == "error":
            payload = {
                "errorCode": GEMINI_ERROR_CODE,
                "errorMessage": text_field(record, "message") or GEMINI_ERROR_MESSAGE,
            }
            canonical_type = "error"
        else:
            return None

        return emit(self, canonical_type, payload, session_id=session_id, sequence=sequence)
