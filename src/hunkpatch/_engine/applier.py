"""Rewrite line sequences by consuming validated hunks."""

from __future__ import annotations

from typing import Sequence

from .parser import Hunk


def apply_hunk(lines: Sequence[str], hunk: Hunk) -> list[str]:
    """Return a new line list with ``hunk`` applied to ``lines``.

    Offsets come from walking the hunk body, never from the header counts.
    Context lines copy the existing text at the cursor, so whitespace that was
    only tolerated during validation is preserved.
    """
    result: list[str] = list(lines[: hunk.old_start])
    cursor = hunk.old_start

    for line in hunk.lines:
        if line.kind == "context":
            result.append(lines[cursor])
            cursor += 1
        elif line.kind == "delete":
            cursor += 1
        else:
            result.append(line.text)

    result.extend(lines[cursor:])
    return result


def apply_hunks(lines: Sequence[str], hunks: Sequence[Hunk]) -> list[str]:
    """Apply ``hunks`` from the highest offset down.

    Working backwards leaves the region below each hunk untouched until its
    own turn, so no offsets need rebasing between hunks.  Hunks sharing an
    offset are applied last-first so their output keeps the input order.
    """
    result = list(lines)
    ordered = sorted(hunks, key=lambda item: item.old_start)
    for hunk in reversed(ordered):
        result = apply_hunk(result, hunk)
    return result


__all__ = ["apply_hunk", "apply_hunks"]
