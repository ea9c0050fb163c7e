"""Tests for the console navigation sink."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from ctagnav.exceptions import NavigationTargetMissingError
from ctagnav.navigation import (
    ConsoleNavigator,
    NavigationTarget,
    RevealMode,
    choose_reveal_mode,
)


def _console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=120, color_system=None), buffer


class TestChooseRevealMode:
    def test_new_line_is_centered(self) -> None:
        assert choose_reveal_mode(None, 4) is RevealMode.IN_CENTER
        assert choose_reveal_mode(2, 4) is RevealMode.IN_CENTER

    def test_active_line_is_not_recentered(self) -> None:
        assert choose_reveal_mode(4, 4) is RevealMode.IN_CENTER_IF_OUTSIDE_VIEWPORT


class TestConsoleNavigator:
    def test_reveal_shows_excerpt(self, tmp_path: Path) -> None:
        lines = [f"line {i}" for i in range(1, 11)]
        (tmp_path / "math.php").write_text("\n".join(lines) + "\n", encoding="utf-8")
        console, buffer = _console()
        navigator = ConsoleNavigator(tmp_path, console)

        navigator.reveal(NavigationTarget(file_path="math.php", line_number=4))

        output = buffer.getvalue()
        assert "math.php:5" in output
        assert "line 5" in output
        assert navigator.active == ((tmp_path / "math.php").resolve(), 4)

    def test_same_line_prints_location_only(self, tmp_path: Path) -> None:
        (tmp_path / "a.php").write_text("one\ntwo\nthree\n", encoding="utf-8")
        console, buffer = _console()
        navigator = ConsoleNavigator(tmp_path, console)
        target = NavigationTarget(file_path="a.php", line_number=1)

        navigator.reveal(target)
        first = buffer.getvalue()
        navigator.reveal(target)
        second = buffer.getvalue()[len(first):]

        assert second.strip() == "a.php:2"

    def test_bracketed_file_name_is_not_markup(self, tmp_path: Path) -> None:
        (tmp_path / "[old]a.php").write_text("one\ntwo\n", encoding="utf-8")
        console, buffer = _console()
        navigator = ConsoleNavigator(tmp_path, console)
        target = NavigationTarget(file_path="[old]a.php", line_number=0)

        navigator.reveal(target)
        navigator.reveal(target)

        assert buffer.getvalue().count("[old]a.php:1") == 2

    def test_failed_reveal_keeps_active_location(self, tmp_path: Path) -> None:
        path = tmp_path / "a.php"
        path.write_text("one\ntwo\nthree\n", encoding="utf-8")
        console, _ = _console()
        navigator = ConsoleNavigator(tmp_path, console)
        navigator.reveal(NavigationTarget(file_path="a.php", line_number=0))
        path.unlink()

        with pytest.raises(NavigationTargetMissingError):
            navigator.reveal(NavigationTarget(file_path="a.php", line_number=2))
        assert navigator.active == (path.resolve(), 0)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        console, _ = _console()
        navigator = ConsoleNavigator(tmp_path, console)

        with pytest.raises(NavigationTargetMissingError) as exc_info:
            navigator.reveal(NavigationTarget(file_path="gone.php", line_number=0))
        assert exc_info.value.path == (tmp_path / "gone.php").resolve()
        assert navigator.active is None
