"""Line-ending normalisation and splitting."""

from __future__ import annotations

from typing import Sequence


def normalise_line_endings(text: str) -> str:
    """Convert CRLF sequences to LF so offsets never depend on line-ending style."""
    return text.replace("\r\n", "\n")


def split_lines(text: str) -> list[str]:
    """Split normalised text on LF; an empty string yields no lines."""
    normalised = normalise_line_endings(text)
    if normalised == "":
        return []
    return normalised.split("\n")


def join_lines(lines: Sequence[str]) -> str:
    return "\n".join(lines)
