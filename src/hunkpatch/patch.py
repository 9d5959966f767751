"""Apply unified diffs to in-memory content with all-or-nothing semantics."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping

from ._engine.pipeline import PatchPipeline
from .config import PatchSettings
from .errors import PatchError, PatchTooLarge

TELEMETRY_LOGGER = logging.getLogger("hunkpatch.telemetry")


def _serialise_event_value(value: Any) -> Any:
    """Convert telemetry payload values into JSON-friendly representations."""
    if isinstance(value, Enum):
        return _serialise_event_value(value.value)
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, (list, tuple, set)):
        return [_serialise_event_value(item) for item in value]
    if isinstance(value, Mapping):
        return {str(key): _serialise_event_value(child) for key, child in value.items()}
    return str(value)


def _emit_patch_event(event: str, **fields: Any) -> None:
    """Log a structured telemetry event as compact JSON."""
    payload = {"event": event, "timestamp": datetime.now(timezone.utc).isoformat()}
    for key, value in fields.items():
        payload[key] = _serialise_event_value(value)
    TELEMETRY_LOGGER.info(json.dumps(payload, separators=(",", ":"), ensure_ascii=True))


def apply_patch(
    original: str,
    diff_text: str,
    *,
    settings: PatchSettings | None = None,
) -> str:
    """Return ``original`` with every hunk of ``diff_text`` applied.

    The result is joined with ``\\n`` regardless of the input line endings.
    Raises a :class:`~hunkpatch.errors.PatchError` subclass when the diff is
    malformed, does not match ``original``, or breaks the configured limits;
    nothing is produced in that case.
    """
    active = settings or PatchSettings()
    diff_bytes = len(diff_text.encode("utf-8", errors="replace"))

    try:
        if active.max_patch_bytes > 0 and diff_bytes > active.max_patch_bytes:
            raise PatchTooLarge(diff_bytes, active.max_patch_bytes)
        run = PatchPipeline(
            original=original,
            diff_text=diff_text,
            normalized_fallback=active.normalized_fallback,
        ).run()
    except PatchError as error:
        if active.emit_telemetry:
            _emit_patch_event(
                "patch_apply_failed",
                kind=error.kind,
                message=str(error),
                details=error.details,
                diff_bytes=diff_bytes,
            )
        raise

    if active.emit_telemetry:
        _emit_patch_event(
            "patch_apply_succeeded",
            hunks=len(run.hunks),
            mode=run.mode,
            original_lines=run.original_line_count,
            result_lines=run.result_line_count,
            diff_bytes=diff_bytes,
        )
    return run.content


__all__ = ["apply_patch"]
