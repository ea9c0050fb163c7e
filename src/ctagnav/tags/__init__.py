"""Tag index: record parsing, storage, lifecycle, search and disambiguation."""

from __future__ import annotations

from ctagnav.tags.manager import IndexStatus, TagIndexManager
from ctagnav.tags.parser import TagRecord, parse_tag_line
from ctagnav.tags.picker import pick_and_navigate, render_labels, resolve_label
from ctagnav.tags.search import SearchMode, filter_tags, search_tags
from ctagnav.tags.store import TagStore

__all__ = [
    "IndexStatus",
    "SearchMode",
    "TagIndexManager",
    "TagRecord",
    "TagStore",
    "filter_tags",
    "parse_tag_line",
    "pick_and_navigate",
    "render_labels",
    "resolve_label",
    "search_tags",
]
