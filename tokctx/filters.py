"""
File-name filters for tokenizers.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import pathspec

__all__ = ["FileFilter"]


class FileFilter:
    """
    Case-insensitive predicate over file paths, compiled from gitwildmatch
    patterns.
    """

    __slots__ = ("patterns", "_spec")

    def __init__(self, patterns: Iterable[str]):
        self.patterns: List[str] = [pat.lower() for pat in patterns]
        self._spec = pathspec.PathSpec.from_lines("gitwildmatch", self.patterns)

    @classmethod
    def for_extensions(cls, extensions: Iterable[str]) -> FileFilter:
        """Filter accepting files that end with one of the extensions (".py")."""
        return cls(f"*{ext}" for ext in extensions)

    def __call__(self, path: str | Path) -> bool:
        return self.matches(path)

    def matches(self, path: str | Path) -> bool:
        posix = Path(path).as_posix().lower()
        return self._spec.match_file(posix)

    def __repr__(self) -> str:
        return f"FileFilter({self.patterns!r})"
