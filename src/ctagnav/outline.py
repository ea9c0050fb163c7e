"""Per-file symbol outline, queried straight from ctags.

Independent of the persistent tag index: every call runs ctags on one file
and returns that file's tag lines, so no status gating is involved.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from pathlib import Path

from ctagnav.config import CtagsConfig
from ctagnav.notify import ConsoleNotifier, Notifier
from ctagnav.tools import ToolResult
from ctagnav.tools.shell import ctags_argv, run_process

ProcessRunner = Callable[[list[str], Path], Awaitable[ToolResult]]

UNTITLED_PREFIX = "Untitled-"


def is_untitled(file_path: Path) -> bool:
    """True for unsaved, editor-only documents that ctags cannot read."""
    return file_path.name.startswith(UNTITLED_PREFIX) and not file_path.exists()


def split_outline(output: str) -> list[str]:
    """Split ctags stdout into tag lines, dropping the trailing empty line."""
    lines = output.replace("\r\n", "\n").split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


class OutlineEngine:
    """Lists the symbols of a single file.

    Args:
        config: Resolved configuration (ctags command and outline options).
        runner: Runs an argv in a directory. Defaults to a subprocess.
        notifier: Sink for failure messages.
    """

    def __init__(
        self,
        config: CtagsConfig,
        *,
        runner: ProcessRunner | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self._config = config
        self._runner = runner or run_process
        self._notifier = notifier or ConsoleNotifier(log_level=config.log_level)

    async def outline(self, file_path: Path) -> list[str]:
        """Return the raw tag lines of file_path, in ctags output order.

        Untitled or missing files yield an empty list; a missing file is
        also reported through the notifier.

        Raises:
            ConfigError: If the outline option string cannot be parsed.
        """
        if is_untitled(file_path):
            self._notifier.debug(f"No outline for {file_path.name}: document is not saved")
            return []
        if not file_path.is_file():
            self._notifier.error(f"Cannot outline {file_path}: no such file")
            return []

        file_path = file_path.resolve()
        argv = ctags_argv(self._config.ctags_command, self._config.outline_options, str(file_path))
        result = await self._runner(argv, file_path.parent)
        if not result.success:
            self._notifier.error(f"Outline failed for {file_path.name}: {result.error}")
        if not result.output:
            return []
        return split_outline(result.output)
