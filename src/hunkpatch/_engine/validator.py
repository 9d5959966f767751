"""Check hunks against the content they are about to modify."""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from .parser import Hunk


class ValidationMode(str, Enum):
    """How a hunk's declared lines are compared with the original."""

    STRICT = "strict"
    NORMALIZED = "normalized"


def lines_match(expected: str, actual: str, mode: ValidationMode) -> bool:
    if mode is ValidationMode.STRICT:
        return expected == actual
    return expected.strip() == actual.strip()


def validate_hunk(original_lines: Sequence[str], hunk: Hunk, mode: ValidationMode) -> bool:
    """Return True when every context/delete line of ``hunk`` matches ``original_lines``.

    Normalized mode only decides acceptance; the applier always copies the
    original's untouched text into the result.
    """
    cursor = hunk.old_start
    for line in hunk.lines:
        if line.kind == "add":
            continue
        if cursor >= len(original_lines):
            return False
        if not lines_match(line.text, original_lines[cursor], mode):
            return False
        cursor += 1
    return True


def first_failing_hunk(
    original_lines: Sequence[str],
    hunks: Sequence[Hunk],
    mode: ValidationMode,
) -> Hunk | None:
    """Return the first hunk that does not validate under ``mode``."""
    for hunk in hunks:
        if not validate_hunk(original_lines, hunk, mode):
            return hunk
    return None


__all__ = ["ValidationMode", "first_failing_hunk", "lines_match", "validate_hunk"]
