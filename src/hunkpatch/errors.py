"""Typed failures raised while parsing, validating, or applying a diff."""

from __future__ import annotations

from typing import Any, Mapping


class PatchError(RuntimeError):
    """Raised when a patch fails validation or application."""

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details: dict[str, Any] = dict(details or {})

    @property
    def kind(self) -> str:
        return str(self.details.get("kind") or "patch_error")


class MalformedHunkHeader(PatchError):
    """A line starting with ``@@`` did not match the hunk header shape."""

    def __init__(self, line: str) -> None:
        super().__init__(
            f"Invalid hunk header: {line}",
            details={"kind": "malformed_hunk_header", "line": line},
        )
        self.line = line


class HunkValidationFailed(PatchError):
    """A hunk's context or deleted lines do not match the original content.

    ``line`` is the one-based line in the original content where the failing
    hunk starts.  ``mode`` names the last validation mode that was attempted.
    """

    def __init__(self, line: int, *, mode: str) -> None:
        super().__init__(
            f"Hunk validation failed: context mismatch at line {line}",
            details={"kind": "hunk_validation_failed", "line": line, "mode": mode},
        )
        self.line = line
        self.mode = mode


class HunkOrderError(PatchError):
    """Hunks overlap each other or are not sorted by their original offset."""

    def __init__(self, line: int) -> None:
        super().__init__(
            f"Hunk at line {line} overlaps or precedes the previous hunk",
            details={"kind": "hunk_order", "line": line},
        )
        self.line = line


class PatchTooLarge(PatchError):
    """The diff text exceeds the configured size limit."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(
            f"Patch exceeds maximum size of {limit} bytes ({size} bytes).",
            details={"kind": "patch_too_large", "size": size, "limit": limit},
        )
        self.size = size
        self.limit = limit


class ConfigError(RuntimeError):
    """Raised when patch settings cannot be loaded."""


__all__ = [
    "ConfigError",
    "HunkOrderError",
    "HunkValidationFailed",
    "MalformedHunkHeader",
    "PatchError",
    "PatchTooLarge",
]
