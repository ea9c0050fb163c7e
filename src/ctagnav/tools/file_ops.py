"""Tag file access: existence, size and line streaming."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator
from pathlib import Path

# Lines read between two yields to the event loop.
_YIELD_EVERY = 1_000


def file_exists(path: Path) -> bool:
    return path.is_file()


def file_size(path: Path) -> int:
    """Size of path in bytes.

    Raises:
        OSError: If the file cannot be stat'ed.
    """
    return path.stat().st_size


async def read_tag_lines(path: Path) -> AsyncGenerator[str, None]:
    """Yield the lines of path one at a time, without line terminators.

    The file is never held in memory as a whole. Read errors propagate as
    OSError to the consumer.
    """
    with path.open("r", encoding="utf-8", errors="replace", newline="") as fh:
        for count, line in enumerate(fh, start=1):
            yield line.rstrip("\r\n")
            if count % _YIELD_EVERY == 0:
                await asyncio.sleep(0)
