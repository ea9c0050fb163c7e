"""External process execution."""

from __future__ import annotations

import asyncio
import shlex
from pathlib import Path

from ctagnav.exceptions import ConfigError
from ctagnav.tools import ToolResult


def ctags_argv(command: str, options: str, *extra: str) -> list[str]:
    """Build an argv list for ctags from a command and an option string.

    Raises:
        ConfigError: If options has unbalanced quoting.
    """
    try:
        return [command, *shlex.split(options), *extra]
    except ValueError as exc:
        raise ConfigError(f"Cannot parse ctags options {options!r}: {exc}") from exc


async def run_process(
    argv: list[str],
    cwd: Path,
    timeout: float | None = None,
) -> ToolResult:
    """Run argv in cwd and collect its output.

    No shell is involved, so paths with spaces need no quoting.

    Args:
        argv: Program and arguments.
        cwd: Working directory for the process.
        timeout: Maximum seconds to wait; None waits for completion.

    Returns:
        ToolResult with stdout, or an error message.
    """
    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=str(cwd),
        )
    except OSError as exc:
        return ToolResult(success=False, output="", error=f"Failed to run {argv[0]}: {exc}")

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.communicate()
        return ToolResult(
            success=False,
            output="",
            error=f"Command timed out after {timeout}s: {shlex.join(argv)}",
        )

    stdout_str = stdout.decode("utf-8", errors="replace")
    if process.returncode != 0:
        stderr_str = stderr.decode("utf-8", errors="replace").strip()
        detail = f": {stderr_str}" if stderr_str else ""
        return ToolResult(
            success=False,
            output=stdout_str,
            error=f"Exit code {process.returncode}{detail}",
        )
    return ToolResult(success=True, output=stdout_str)
