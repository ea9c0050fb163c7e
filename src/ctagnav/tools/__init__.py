"""Thin I/O helpers: external processes and tag-file access."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["ToolResult"]


@dataclass
class ToolResult:
    """Result from running an external tool.

    Attributes:
        success: Whether the tool exited successfully.
        output: The tool's stdout text.
        error: Error message if the tool failed.
    """

    success: bool
    output: str
    error: str | None = None
