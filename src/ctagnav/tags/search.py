"""Case-insensitive substring search over raw tag lines.

Two modes, selected by the query itself:

* symbol mode (default): the query must occur inside the symbol name.
* path mode (query starts with ``@``): the rest of the query must occur
  inside the file path of the tag.

Results keep the order of the input lines; there is no ranking.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from typing import assert_never

from ctagnav.exceptions import QueryEmptyError, SymbolNotFoundError
from ctagnav.tags.parser import parse_tag_line

PATH_PREFIX = "@"


class SearchMode(enum.Enum):
    """What part of a tag a query is matched against."""

    SYMBOL = "symbol"
    PATH = "path"


def split_query(query: str) -> tuple[SearchMode, str]:
    """Return the search mode and the lower-cased needle for query."""
    if query.startswith(PATH_PREFIX):
        return SearchMode.PATH, query[len(PATH_PREFIX):].lower()
    return SearchMode.SYMBOL, query.lower()


def filter_tags(query: str, lines: Iterable[str]) -> list[str]:
    """Return the raw lines matching query, in their original order.

    Unparseable lines never match. An empty query matches nothing.

    Args:
        query: Symbol fragment, or ``@`` followed by a path fragment.
        lines: Raw tag lines (typically a TagStore).

    Returns:
        Matching raw lines.
    """
    if not query:
        return []

    mode, needle = split_query(query)
    matches: list[str] = []
    for line in lines:
        record = parse_tag_line(line)
        if record is None:
            continue
        match mode:
            case SearchMode.SYMBOL:
                haystack = record.symbol
            case SearchMode.PATH:
                haystack = record.file_path
            case _:
                assert_never(mode)
        if needle in haystack.lower():
            matches.append(line)
    return matches


def search_tags(query: str | None, lines: Iterable[str]) -> list[str]:
    """Search lines for query, signalling empty queries and misses.

    Raises:
        QueryEmptyError: If query is None or empty.
        SymbolNotFoundError: If nothing matches.
    """
    if not query:
        raise QueryEmptyError("No query supplied")

    matches = filter_tags(query, lines)
    if not matches:
        raise SymbolNotFoundError(f"Cannot find the symbol: {query}", query=query)
    return matches
