"""Agent adapter contract and shared field helpers."""

from __future__ import annotations

from typing import Any, Protocol

from agentwire.core.models import CanonicalEvent, make_event


class AgentAdapter(Protocol):
    """Protocol for per-agent invocation and event normalization."""

    name: str
    executable: str

    def build_invocation(
        self,
        task: str,
        working_directory: str,
        extra_args: str | None = None,
        *,
        auto_approve: bool = True,
    ) -> list[str]:
        """Build the argument vector used to spawn the agent."""

    def normalize(
        self,
        record: Any,
        *,
        session_id: str,
        sequence: int,
    ) -> CanonicalEvent | None:
        """Map one decoded native record to a canonical event, or ``None``."""


def emit(
    adapter: AgentAdapter,
    event_type: str,
    payload: dict[str, Any] | None = None,
    *,
    session_id: str,
    sequence: int,
) -> CanonicalEvent:
    """Build an event tagged with the adapter's own identity."""
    return make_event(
        event_type,
        payload,
        source=adapter.name,
        session_id=session_id,
        sequence=sequence,
    )


def native_type(record: Any) -> str | None:
    if not isinstance(record, dict):
        return None
    value = record.get("type")
    if not isinstance(value, str):
        return None
    return value


def mapping_field(record: dict[str, Any], key: str) -> dict[str, Any] | None:
    value = record.get(key)
    if isinstance(value, dict):
        return value
    return None


def text_field(record: dict[str, Any] | None, key: str) -> str | None:
    if record is None:
        return None
    value = record.get(key)
    if isinstance(value, str):
        return value
    return None


def int_field(record: dict[str, Any] | None, key: str) -> int | None:
    if record is None:
        return None
    value = record.get(key)
    # bool is an int subclass but never a valid code or duration
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def first_text(record: dict[str, Any] | None, *keys: str) -> str:
    """Return the first non-empty string among ``keys``, else ``""``."""
    for key in keys:
        value = text_field(record, key)
        if value:
            return value
    return ""
