from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def make_diff(*lines: str) -> str:
    """Join diff lines with LF; avoids dedent stripping context-line spaces."""

    return "\n".join(lines)


@pytest.fixture()
def diff():
    """Expose :func:`make_diff` to tests."""

    return make_diff
