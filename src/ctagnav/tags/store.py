"""In-memory store of raw tag lines for one workspace root."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

from ctagnav.tags.parser import is_comment_line


class TagStore:
    """Ordered raw tag lines belonging to exactly one workspace root.

    Metadata (``!``) and empty lines are dropped on the way in, so every
    stored line is a candidate record. Lines are kept raw and parsed lazily
    by the search engine.
    """

    def __init__(self, root: Path, lines: Iterable[str] = ()) -> None:
        self._root = root
        self._lines: list[str] = []
        self.extend(lines)

    @property
    def root(self) -> Path:
        """Workspace root this store belongs to."""
        return self._root

    @property
    def lines(self) -> tuple[str, ...]:
        """Snapshot of the stored lines in load order."""
        return tuple(self._lines)

    def add(self, line: str) -> bool:
        """Append a line unless it is empty or metadata. Returns True if stored."""
        if not line or is_comment_line(line):
            return False
        self._lines.append(line)
        return True

    def extend(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.add(line)

    def replace(self, lines: Iterable[str]) -> None:
        """Swap the whole content for lines."""
        self._lines = []
        self.extend(lines)

    def clear(self) -> None:
        self._lines = []

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def __repr__(self) -> str:
        return f"TagStore(root={str(self._root)!r}, lines={len(self._lines)})"
