"""JSON decoding for reassembled records."""

from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

_PREVIEW_LIMIT = 200


def decode_record(record: str) -> tuple[bool, Any]:
    """Decode one record; return ``(ok, value)``.

    Invalid JSON is reported on the module logger and yields ``(False, None)``
    so the caller can skip the record and carry on with the next one.
    """
    try:
        return True, json.loads(record)
    except (ValueError, RecursionError) as error:
        logger.warning(f"Failed to decode record: {error}; record={_preview(record)!r}")
        return False, None


def _preview(record: str) -> str:
    if len(record) <= _PREVIEW_LIMIT:
        return record
    return record[:_PREVIEW_LIMIT] + "..."
