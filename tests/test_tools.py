"""Tests for process execution and tag file access."""

from __future__ import annotations

from pathlib import Path

import pytest

from ctagnav.exceptions import ConfigError
from ctagnav.tools.file_ops import file_exists, file_size, read_tag_lines
from ctagnav.tools.shell import ctags_argv, run_process


class TestCtagsArgv:
    def test_splits_options(self) -> None:
        assert ctags_argv("ctags", "-R --excmd=number", "-f", "ctags.tmp") == [
            "ctags",
            "-R",
            "--excmd=number",
            "-f",
            "ctags.tmp",
        ]

    def test_quoted_option(self) -> None:
        assert ctags_argv("ctags", "--exclude='node modules'") == ["ctags", "--exclude=node modules"]

    def test_unbalanced_quotes(self) -> None:
        with pytest.raises(ConfigError):
            ctags_argv("ctags", "--exclude='oops")


class TestRunProcess:
    @pytest.mark.asyncio
    async def test_echo(self, tmp_path: Path) -> None:
        result = await run_process(["echo", "hello"], tmp_path)
        assert result.success
        assert "hello" in result.output

    @pytest.mark.asyncio
    async def test_runs_in_cwd(self, tmp_path: Path) -> None:
        result = await run_process(["pwd"], tmp_path)
        assert result.success
        assert Path(result.output.strip()).resolve() == tmp_path.resolve()

    @pytest.mark.asyncio
    async def test_failing_command(self, tmp_path: Path) -> None:
        result = await run_process(["false"], tmp_path)
        assert not result.success
        assert "exit code" in (result.error or "").lower()

    @pytest.mark.asyncio
    async def test_missing_executable(self, tmp_path: Path) -> None:
        result = await run_process(["ctagnav-no-such-binary"], tmp_path)
        assert not result.success
        assert "failed to run" in (result.error or "").lower()

    @pytest.mark.asyncio
    async def test_timeout(self, tmp_path: Path) -> None:
        result = await run_process(["sleep", "10"], tmp_path, timeout=1)
        assert not result.success
        assert "timed out" in (result.error or "").lower()


class TestFileOps:
    def test_exists_and_size(self, tmp_path: Path) -> None:
        path = tmp_path / "ctags.tmp"
        assert not file_exists(path)
        path.write_bytes(b"abc\n")
        assert file_exists(path)
        assert file_size(path) == 4

    def test_directory_is_not_a_tag_file(self, tmp_path: Path) -> None:
        assert not file_exists(tmp_path)

    @pytest.mark.asyncio
    async def test_read_tag_lines_strips_terminators(self, tmp_path: Path) -> None:
        path = tmp_path / "ctags.tmp"
        path.write_bytes(b'a\tx.php\t1;"\tf\r\nb\ty.php\t2;"\tf\n\nlast')

        lines = [line async for line in read_tag_lines(path)]

        assert lines == ['a\tx.php\t1;"\tf', 'b\ty.php\t2;"\tf', "", "last"]

    @pytest.mark.asyncio
    async def test_read_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            async for _ in read_tag_lines(tmp_path / "missing"):
                pass
