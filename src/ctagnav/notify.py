"""Notification sink for user-facing status and error messages."""

from __future__ import annotations

from typing import Protocol

from rich.console import Console
from rich.markup import escape

_LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40}


class Notifier(Protocol):
    def debug(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class ConsoleNotifier:
    """Fire-and-forget messages printed to a rich console (stderr by default)."""

    def __init__(self, console: Console | None = None, log_level: str = "INFO") -> None:
        self._console = console or Console(stderr=True)
        self._threshold = _LEVELS.get(log_level.upper(), _LEVELS["INFO"])

    def debug(self, message: str) -> None:
        if self._threshold <= _LEVELS["DEBUG"]:
            self._console.print(f"[dim]{escape(message)}[/dim]")

    def info(self, message: str) -> None:
        if self._threshold <= _LEVELS["INFO"]:
            self._console.print(f"[bold blue]ctags[/bold blue] {escape(message)}")

    def error(self, message: str) -> None:
        self._console.print(f"[bold red]Error:[/bold red] {escape(message)}")
