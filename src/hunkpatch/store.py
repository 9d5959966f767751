"""In-memory file store that edits its files through unified diffs."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterator, Tuple

from .config import PatchSettings
from .errors import PatchError
from .patch import apply_patch

_FENCED_DIFF = re.compile(r"```(?:diff|patch|udiff)[^\n]*\n(?P<body>.*?)\n?```", re.DOTALL)


def extract_diff(response_text: str) -> str:
    """Return the first fenced ``diff`` block of ``response_text``, or the text itself."""
    match = _FENCED_DIFF.search(response_text)
    if match:
        return match.group("body")
    return response_text


@dataclass(frozen=True, slots=True)
class FileEdit:
    """Before/after snapshot of one file edited through a diff."""

    path: str
    before: str
    after: str

    @property
    def changed(self) -> bool:
        return self.before != self.after


class VirtualFileStore:
    """Holds file contents keyed by path and applies diffs to them atomically.

    Instances are created and owned by the caller; each one has its own
    files and settings.
    """

    def __init__(
        self,
        files: Dict[str, str] | None = None,
        *,
        settings: PatchSettings | None = None,
    ) -> None:
        self._files: Dict[str, str] = dict(files or {})
        self.settings = settings or PatchSettings()

    def __contains__(self, path: object) -> bool:
        return path in self._files

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths())

    def __len__(self) -> int:
        return len(self._files)

    def exists(self, path: str) -> bool:
        return path in self._files

    def read(self, path: str) -> str:
        try:
            return self._files[path]
        except KeyError as error:
            raise FileNotFoundError(path) from error

    def write(self, path: str, content: str) -> None:
        self._files[path] = content

    def delete(self, path: str) -> None:
        self._files.pop(path, None)

    def paths(self) -> Tuple[str, ...]:
        return tuple(sorted(self._files))

    def apply_diff(self, path: str, diff_text: str) -> FileEdit:
        """Apply ``diff_text`` to ``path`` and store the result.

        A missing file is treated as empty content so a diff can create it.
        The stored content is only replaced when the whole diff applies.
        """
        if "@@" not in diff_text:
            raise PatchError(
                f"Diff for {path} does not contain any hunk headers.",
                details={"kind": "missing_hunk_header", "path": path},
            )
        before = self._files.get(path, "")
        after = apply_patch(before, diff_text, settings=self.settings)
        self._files[path] = after
        return FileEdit(path=path, before=before, after=after)


__all__ = ["FileEdit", "VirtualFileStore", "extract_diff"]
