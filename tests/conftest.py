"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from ctagnav.config import CtagsConfig
from ctagnav.notify import ConsoleNotifier

SAMPLE_TAGS = (
    "!_TAG_FILE_FORMAT\t2\t/extended format/\n"
    "!_TAG_FILE_SORTED\t1\t/0=unsorted, 1=sorted/\n"
    'foo\tA.php\t10;"\tf\n'
    'Foo2\tB.php\t2;"\tf\n'
    'Renderer\tsrc/view/Renderer.php\t3;"\tc\n'
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's global config and CTAGNAV_* variables out of tests."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setattr("ctagnav.config._GLOBAL_CONFIG_PATH", home / "config.toml")
    for name in (
        "CTAGNAV_COMMAND",
        "CTAGNAV_TAG_FILE",
        "CTAGNAV_LANGUAGES",
        "CTAGNAV_MAX_TAG_FILE_MB",
        "CTAGNAV_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def notifier() -> MagicMock:
    """Notifier that records every message for assertions."""
    return MagicMock(spec=ConsoleNotifier)


@pytest.fixture
def sample_tags() -> str:
    """Tag file content: two metadata lines and three symbols."""
    return SAMPLE_TAGS


@pytest.fixture
def workspace(tmp_path: Path, sample_tags: str) -> Path:
    """A workspace root with a generated tag file and the files it points at."""
    (tmp_path / "ctags.tmp").write_text(sample_tags, encoding="utf-8")
    (tmp_path / "A.php").write_text("<?php\n" + "\n" * 20, encoding="utf-8")
    (tmp_path / "B.php").write_text("<?php\nfunction Foo2() {}\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def test_config(workspace: Path) -> CtagsConfig:
    return CtagsConfig(project_dir=workspace, log_level="DEBUG")
