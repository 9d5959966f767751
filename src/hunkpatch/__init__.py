"""Apply unified diff hunks to text, all or nothing."""

from .errors import (
    ConfigError,
    HunkOrderError,
    HunkValidationFailed,
    MalformedHunkHeader,
    PatchError,
    PatchTooLarge,
)
from .patch import apply_patch

__all__ = [
    "ConfigError",
    "HunkOrderError",
    "HunkValidationFailed",
    "MalformedHunkHeader",
    "PatchError",
    "PatchTooLarge",
    "apply_patch",
]
