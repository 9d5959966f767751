from __future__ import annotations

import pytest

from hunkpatch._engine.applier import apply_hunk, apply_hunks
from hunkpatch._engine.parser import DiffLine, Hunk
from hunkpatch._engine.pipeline import PatchPipeline, check_hunk_order
from hunkpatch._engine.validator import ValidationMode, first_failing_hunk, validate_hunk
from hunkpatch.errors import HunkOrderError, HunkValidationFailed


def _hunk(old_start: int, *body: tuple[str, str]) -> Hunk:
    lines = [DiffLine(kind, text) for kind, text in body]
    return Hunk(old_start=old_start, old_count=1, new_start=old_start, new_count=1, lines=lines)


ORIGINAL = ["alpha", "  beta  ", "gamma", "delta"]


def test_validate_hunk_strict_requires_exact_text() -> None:
    hunk = _hunk(1, ("context", "beta"), ("delete", "gamma"), ("add", "GAMMA"))

    assert not validate_hunk(ORIGINAL, hunk, ValidationMode.STRICT)
    assert validate_hunk(ORIGINAL, hunk, ValidationMode.NORMALIZED)


def test_validate_hunk_fails_past_end_of_content() -> None:
    hunk = _hunk(3, ("context", "delta"), ("delete", "epsilon"))

    assert not validate_hunk(ORIGINAL, hunk, ValidationMode.NORMALIZED)


def test_validate_hunk_ignores_add_lines() -> None:
    hunk = _hunk(4, ("add", "epsilon"), ("add", "zeta"))

    assert validate_hunk(ORIGINAL, hunk, ValidationMode.STRICT)
    assert validate_hunk([], _hunk(0, ("add", "x")), ValidationMode.STRICT)


def test_first_failing_hunk_reports_first_in_input_order() -> None:
    good = _hunk(0, ("context", "alpha"))
    bad = _hunk(2, ("delete", "nope"))

    assert first_failing_hunk(ORIGINAL, [good, bad], ValidationMode.STRICT) is bad
    assert first_failing_hunk(ORIGINAL, [good], ValidationMode.STRICT) is None


def test_apply_hunk_keeps_original_context_text() -> None:
    hunk = _hunk(1, ("context", "beta"), ("delete", "gamma"), ("add", "GAMMA"), ("add", "GAMMA2"))

    result = apply_hunk(ORIGINAL, hunk)

    assert result == ["alpha", "  beta  ", "GAMMA", "GAMMA2", "delta"]
    assert ORIGINAL == ["alpha", "  beta  ", "gamma", "delta"]


def test_apply_hunks_runs_highest_offset_first() -> None:
    lines = [f"line{index}" for index in range(1, 8)]
    top = _hunk(0, ("delete", "line1"), ("add", "a"), ("add", "b"), ("add", "c"), ("context", "line2"))
    bottom = _hunk(5, ("context", "line6"), ("delete", "line7"))

    result = apply_hunks(lines, [top, bottom])

    assert result == ["a", "b", "c", "line2", "line3", "line4", "line5", "line6"]


def test_apply_hunks_same_offset_inserts_keep_input_order() -> None:
    first = _hunk(0, ("add", "one"))
    second = _hunk(0, ("add", "two"))

    assert apply_hunks(["base"], [first, second]) == ["one", "two", "base"]


def test_check_hunk_order_rejects_overlap() -> None:
    first = _hunk(0, ("context", "alpha"), ("delete", "  beta  "))
    overlapping = _hunk(1, ("context", "  beta  "))

    with pytest.raises(HunkOrderError) as excinfo:
        check_hunk_order([first, overlapping])

    assert excinfo.value.line == 2


def test_check_hunk_order_rejects_descending_offsets() -> None:
    with pytest.raises(HunkOrderError):
        check_hunk_order([_hunk(3, ("context", "delta")), _hunk(0, ("context", "alpha"))])


def test_check_hunk_order_accepts_adjacent_hunks() -> None:
    check_hunk_order([_hunk(0, ("context", "alpha")), _hunk(1, ("context", "  beta  "))])


def test_pipeline_escalates_whole_batch_to_normalized() -> None:
    text = "@@ -1 +1 @@\n alpha\n@@ -2,2 +2,2 @@\n beta\n-gamma\n+GAMMA"

    run = PatchPipeline(original="\n".join(ORIGINAL), diff_text=text).run()

    assert run.mode is ValidationMode.NORMALIZED
    assert run.content == "alpha\n  beta  \nGAMMA\ndelta"
    assert run.original_line_count == 4
    assert run.result_line_count == 4
    assert len(run.hunks) == 2


def test_pipeline_without_fallback_reports_strict_failure() -> None:
    text = "@@ -2,2 +2,2 @@\n beta\n-gamma\n+GAMMA"
    pipeline = PatchPipeline(original="\n".join(ORIGINAL), diff_text=text, normalized_fallback=False)

    with pytest.raises(HunkValidationFailed) as excinfo:
        pipeline.run()

    assert excinfo.value.line == 2
    assert excinfo.value.mode == "strict"
