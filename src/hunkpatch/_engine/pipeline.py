"""Normalise, parse, validate, and apply a diff as one all-or-nothing step."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence, Tuple

from ..errors import HunkOrderError, HunkValidationFailed
from .applier import apply_hunks
from .lines import join_lines, split_lines
from .parser import Hunk, parse_hunks
from .validator import ValidationMode, first_failing_hunk

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class PatchRun:
    """Result of a successful pipeline run."""

    content: str
    mode: ValidationMode
    hunks: Tuple[Hunk, ...]
    original_line_count: int
    result_line_count: int


def check_hunk_order(hunks: Sequence[Hunk]) -> None:
    """Reject hunks that overlap or are not sorted by ``old_start``."""
    previous: Hunk | None = None
    for hunk in hunks:
        if previous is not None and hunk.old_start < previous.old_end:
            raise HunkOrderError(hunk.old_start + 1)
        previous = hunk


@dataclass(slots=True)
class PatchPipeline:
    """Apply ``diff_text`` to ``original`` or raise before anything is produced."""

    original: str
    diff_text: str
    normalized_fallback: bool = True
    _original_lines: list[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._original_lines = split_lines(self.original)

    def parse(self) -> Tuple[Hunk, ...]:
        hunks = parse_hunks(split_lines(self.diff_text))
        check_hunk_order(hunks)
        return hunks

    def select_mode(self, hunks: Sequence[Hunk]) -> ValidationMode:
        """Pick one validation mode for the whole batch of hunks."""
        failing = first_failing_hunk(self._original_lines, hunks, ValidationMode.STRICT)
        if failing is None:
            return ValidationMode.STRICT
        if not self.normalized_fallback:
            raise HunkValidationFailed(failing.old_start + 1, mode=ValidationMode.STRICT.value)

        LOGGER.debug(
            "Strict validation failed at line %d; retrying all hunks with normalized matching.",
            failing.old_start + 1,
        )
        failing = first_failing_hunk(self._original_lines, hunks, ValidationMode.NORMALIZED)
        if failing is not None:
            raise HunkValidationFailed(failing.old_start + 1, mode=ValidationMode.NORMALIZED.value)
        return ValidationMode.NORMALIZED

    def run(self) -> PatchRun:
        hunks = self.parse()
        mode = self.select_mode(hunks)
        result = apply_hunks(self._original_lines, hunks)
        return PatchRun(
            content=join_lines(result),
            mode=mode,
            hunks=hunks,
            original_line_count=len(self._original_lines),
            result_line_count=len(result),
        )


__all__ = ["PatchPipeline", "PatchRun", "check_hunk_order"]
