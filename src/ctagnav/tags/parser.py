"""Tag record parsing for ctags output lines.

A tag line looks like ``symbol<TAB>file<TAB>12;"<TAB>kind[<TAB>extra...]``
when ctags runs with ``--excmd=number``. Lines starting with ``!`` carry
tag-file metadata and are never records.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_LINE_MARKER = ';"'
_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")
_MIN_FIELDS = 4


@dataclass(frozen=True, slots=True)
class TagRecord:
    """A single parsed tag.

    Attributes:
        symbol: Symbol identifier as written by ctags.
        file_path: Path of the defining file, relative to the workspace root.
        line_number: 0-based line number of the definition.
        kind: ctags kind letter or name (e.g. "f", "c", "function").
    """

    symbol: str
    file_path: str
    line_number: int
    kind: str


def is_comment_line(raw: str) -> bool:
    """Return True for tag-file metadata lines (``!_TAG_...``)."""
    return raw.startswith("!")


def parse_tag_line(raw: str) -> TagRecord | None:
    """Parse one raw tag line.

    Never raises: anything that is not a well-formed record yields None.

    Args:
        raw: A single line from a tag file, without its line terminator.

    Returns:
        The parsed TagRecord, or None when the line is malformed.
    """
    fields = raw.split("\t")
    if len(fields) < _MIN_FIELDS:
        return None

    match = _LEADING_INT_RE.match(fields[2].replace(_LINE_MARKER, ""))
    if match is None:
        return None

    return TagRecord(
        symbol=fields[0],
        file_path=fields[1],
        line_number=int(match.group(1)) - 1,
        kind=fields[3],
    )
