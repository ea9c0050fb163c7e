"""ctagnav exception hierarchy.

All exceptions inherit from CtagnavError so callers can catch the base
class when they want to handle any ctagnav-specific failure uniformly.
"""

from __future__ import annotations

from pathlib import Path


class CtagnavError(Exception):
    """Base exception for all ctagnav errors."""


class ConfigError(CtagnavError):
    """Configuration-related errors (invalid value, bad option string, etc.)."""


class IndexMissingError(CtagnavError):
    """The tag file does not exist yet; generation has to run first."""


class IndexTooLargeError(CtagnavError):
    """The tag file on disk exceeds the configured size cap."""

    def __init__(self, message: str, size: int, limit: int) -> None:
        super().__init__(message)
        self.size = size
        self.limit = limit


class IndexLoadError(CtagnavError):
    """I/O failure while streaming the tag file."""


class IndexGenerationError(CtagnavError):
    """The ctags executable failed to produce a tag file."""


class IndexNotReadyError(CtagnavError):
    """A search was requested before the tag index finished loading."""


class QueryEmptyError(CtagnavError):
    """No query was supplied. Callers treat this as a silent no-op."""


class SymbolNotFoundError(CtagnavError):
    """A search yielded zero matches."""

    def __init__(self, message: str, query: str) -> None:
        super().__init__(message)
        self.query = query


class NavigationTargetMissingError(CtagnavError):
    """The file a tag points at cannot be opened."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class NoWorkspaceError(CtagnavError):
    """No workspace root is open."""
