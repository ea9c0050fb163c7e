"""Navigation sink: reveal a file location in the terminal."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax

from ctagnav.exceptions import NavigationTargetMissingError

_CONTEXT_LINES = 8


@dataclass(frozen=True, slots=True)
class NavigationTarget:
    """Where a tag points.

    Attributes:
        file_path: File path as written in the tag (relative to the root or absolute).
        line_number: 0-based line number.
    """

    file_path: str
    line_number: int


class RevealMode(enum.Enum):
    """How the view scrolls when a line is revealed."""

    IN_CENTER = "in_center"
    IN_CENTER_IF_OUTSIDE_VIEWPORT = "in_center_if_outside_viewport"


class Navigator(Protocol):
    def reveal(self, target: NavigationTarget) -> None: ...


def choose_reveal_mode(active_line: int | None, line_number: int) -> RevealMode:
    """Center on the line unless the cursor already sits on it."""
    if active_line is not None and active_line == line_number:
        return RevealMode.IN_CENTER_IF_OUTSIDE_VIEWPORT
    return RevealMode.IN_CENTER


class ConsoleNavigator:
    """Shows the revealed location as a highlighted excerpt.

    Keeps track of the active document and line the way an editor would, so
    revealing the line the cursor is already on does not re-render the view.
    """

    def __init__(self, root: Path, console: Console | None = None) -> None:
        self._root = root
        self._console = console or Console()
        self._active_file: Path | None = None
        self._active_line: int | None = None

    @property
    def active(self) -> tuple[Path, int] | None:
        """Currently active (file, 0-based line), if any."""
        if self._active_file is None or self._active_line is None:
            return None
        return self._active_file, self._active_line

    def resolve(self, target: NavigationTarget) -> Path:
        """Absolute path of target's file."""
        return (self._root / target.file_path).resolve()

    def reveal(self, target: NavigationTarget) -> None:
        """Open target's file and move the active line to it.

        Raises:
            NavigationTargetMissingError: If the file cannot be read.
        """
        path = self.resolve(target)
        if path == self._active_file:
            mode = choose_reveal_mode(self._active_line, target.line_number)
        else:
            mode = RevealMode.IN_CENTER
        # Read before moving the active location so a failed open leaves it unchanged.
        text = self._open(path, target) if mode is RevealMode.IN_CENTER else None

        self._active_file = path
        self._active_line = target.line_number
        location = escape(f"{target.file_path}:{target.line_number + 1}")

        if text is None:
            self._console.print(f"[cyan]{location}[/cyan]")
            return

        first = max(1, target.line_number + 1 - _CONTEXT_LINES)
        last = target.line_number + 1 + _CONTEXT_LINES
        syntax = Syntax(
            text,
            Syntax.guess_lexer(str(path), code=text),
            line_numbers=True,
            line_range=(first, last),
            highlight_lines={target.line_number + 1},
        )
        self._console.print(Panel(syntax, title=f"[bold cyan]{location}[/bold cyan]", border_style="cyan"))

    @staticmethod
    def _open(path: Path, target: NavigationTarget) -> str:
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise NavigationTargetMissingError(
                f"Cannot open {target.file_path}: {exc}", path=path
            ) from exc
