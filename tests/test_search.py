"""Tests for the tag search engine."""

from __future__ import annotations

import pytest

from ctagnav.exceptions import QueryEmptyError, SymbolNotFoundError
from ctagnav.tags.search import SearchMode, filter_tags, search_tags, split_query

FOO = 'foo\tA.php\t10;"\tf'
FOO2 = 'Foo2\tB.php\t2;"\tf'
RENDERER = 'Renderer\tsrc/view/Renderer.php\t3;"\tc'
LINES = [FOO, FOO2, RENDERER]


class TestSplitQuery:
    def test_symbol_mode(self) -> None:
        assert split_query("Foo") == (SearchMode.SYMBOL, "foo")

    def test_path_mode_strips_prefix(self) -> None:
        assert split_query("@B.php") == (SearchMode.PATH, "b.php")


class TestFilterTags:
    def test_case_insensitive_substring_in_order(self) -> None:
        assert filter_tags("foo", LINES) == [FOO, FOO2]

    def test_upper_case_query(self) -> None:
        assert filter_tags("FOO2", LINES) == [FOO2]

    def test_path_mode(self) -> None:
        assert filter_tags("@b.php", LINES) == [FOO2]

    def test_path_mode_matches_directories(self) -> None:
        assert filter_tags("@view/", LINES) == [RENDERER]

    def test_symbol_mode_ignores_paths(self) -> None:
        assert filter_tags("view", LINES) == []

    def test_empty_query_matches_nothing(self) -> None:
        assert filter_tags("", LINES) == []

    def test_unparseable_lines_excluded(self) -> None:
        lines = ["foo broken line", "foo\tA.php", FOO]
        assert filter_tags("foo", lines) == [FOO]
        assert filter_tags("@a.php", lines) == [FOO]

    def test_input_not_mutated(self) -> None:
        lines = list(LINES)
        filter_tags("foo", lines)
        assert lines == LINES


class TestSearchTags:
    def test_returns_matches(self) -> None:
        assert search_tags("render", LINES) == [RENDERER]

    @pytest.mark.parametrize("query", ["", None])
    def test_empty_query_raises_query_empty(self, query: str | None) -> None:
        with pytest.raises(QueryEmptyError):
            search_tags(query, LINES)

    def test_no_match_raises_symbol_not_found(self) -> None:
        with pytest.raises(SymbolNotFoundError) as exc_info:
            search_tags("missing", LINES)
        assert exc_info.value.query == "missing"
