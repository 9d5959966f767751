"""Parse unified diff text into hunk records."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Literal, Tuple

from ..errors import MalformedHunkHeader

DiffLineKind = Literal["context", "delete", "add"]

_HUNK_HEADER = re.compile(
    r"^@@ -(?P<old_start>\d+)(?:,(?P<old_count>\d+))? "
    r"\+(?P<new_start>\d+)(?:,(?P<new_count>\d+))? @@"
)
_LINE_KINDS: dict[str, DiffLineKind] = {" ": "context", "-": "delete", "+": "add"}


@dataclass(frozen=True, slots=True)
class DiffLine:
    """Single hunk body line with its one-character marker stripped."""

    kind: DiffLineKind
    text: str


@dataclass(slots=True)
class Hunk:
    """One ``@@`` region of a diff.

    ``old_start`` and ``new_start`` are zero-based.  The header values are
    one-based, so ``@@ -3,2 +3,4 @@`` yields ``old_start == 2``; a header
    offset of ``0`` (used for insertions into empty content) maps to ``0``.
    """

    old_start: int
    old_count: int
    new_start: int
    new_count: int
    lines: list[DiffLine] = field(default_factory=list)

    @property
    def consumed(self) -> int:
        """Number of original lines covered by context and delete lines."""
        return sum(1 for line in self.lines if line.kind != "add")

    @property
    def old_end(self) -> int:
        return self.old_start + self.consumed


def _default_count(raw: str | None) -> int:
    return int(raw) if raw is not None else 1


def _zero_based(raw: str) -> int:
    return max(int(raw) - 1, 0)


def parse_hunk_header(line: str) -> Hunk:
    """Build an empty :class:`Hunk` from an ``@@`` header line."""
    match = _HUNK_HEADER.match(line)
    if not match:
        raise MalformedHunkHeader(line)
    return Hunk(
        old_start=_zero_based(match.group("old_start")),
        old_count=_default_count(match.group("old_count")),
        new_start=_zero_based(match.group("new_start")),
        new_count=_default_count(match.group("new_count")),
    )


def parse_hunks(diff_lines: Iterable[str]) -> Tuple[Hunk, ...]:
    """Scan ``diff_lines`` sequentially and return the hunks in input order.

    Lines outside a hunk (file headers, prose) and unrecognised lines inside a
    hunk (``\\ No newline at end of file``, blank lines) are skipped without
    closing the current hunk.
    """
    hunks: list[Hunk] = []
    current: Hunk | None = None

    for line in diff_lines:
        if line.startswith("@@"):
            if current is not None:
                hunks.append(current)
            current = parse_hunk_header(line)
            continue
        if current is None:
            continue
        kind = _LINE_KINDS.get(line[:1])
        if kind is not None:
            current.lines.append(DiffLine(kind=kind, text=line[1:]))

    if current is not None:
        hunks.append(current)
    return tuple(hunks)


__all__ = ["DiffLine", "DiffLineKind", "Hunk", "parse_hunk_header", "parse_hunks"]
