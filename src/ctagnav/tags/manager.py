"""Tag index lifecycle: generation, loading and gated search.

The manager owns the TagStore and the IndexStatus for one workspace root at
a time. Generation and loading are asynchronous; because both requests return
early while a generation or load is in flight, at most one of each is ever
outstanding per root and the store needs no lock.
"""

from __future__ import annotations

import enum
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import aclosing
from pathlib import Path
from typing import Self, assert_never

from ctagnav.config import CtagsConfig
from ctagnav.exceptions import (
    ConfigError,
    IndexGenerationError,
    IndexLoadError,
    IndexMissingError,
    IndexNotReadyError,
    IndexTooLargeError,
    NoWorkspaceError,
)
from ctagnav.notify import ConsoleNotifier, Notifier
from ctagnav.tags.search import search_tags
from ctagnav.tags.store import TagStore
from ctagnav.tools import ToolResult
from ctagnav.tools.file_ops import file_exists, file_size, read_tag_lines
from ctagnav.tools.shell import ctags_argv, run_process

RootProvider = Callable[[], Path | None]
TagGenerator = Callable[[Path], Awaitable[ToolResult]]
TagReader = Callable[[Path], AsyncGenerator[str, None]]


class IndexStatus(enum.Enum):
    """Lifecycle state of the tag index for the active root."""

    EMPTY = "empty"
    GENERATING = "generating"
    GENERATED_ON_DISK = "generated_on_disk"
    LOADING = "loading"
    LOADED = "loaded"


def is_busy(status: IndexStatus) -> bool:
    """True while a generation or load is in flight."""
    match status:
        case IndexStatus.GENERATING | IndexStatus.LOADING:
            return True
        case IndexStatus.EMPTY | IndexStatus.GENERATED_ON_DISK | IndexStatus.LOADED:
            return False
        case _:
            assert_never(status)


class TagIndexManager:
    """Generates, loads and searches the tag index of a workspace root.

    Usage::

        manager = TagIndexManager(config)
        manager.open(Path("/my/project"))
        await manager.request_generate()
        lines = manager.search("render")
        manager.close()

    Before every operation the remembered root is compared with the one
    reported by ``root_provider``. When they differ the index is reset to
    EMPTY for the new root, so a store built for an old root is never
    searched.

    Args:
        config: Resolved configuration (command, options, size cap).
        root_provider: Returns the currently active root. Defaults to the root
            passed to :meth:`open`.
        notifier: Sink for progress and failure messages.
        generator: Runs ctags for a root. Defaults to the ctags executable.
        reader: Streams lines of the tag file. Defaults to a buffered file reader.
    """

    def __init__(
        self,
        config: CtagsConfig,
        *,
        root_provider: RootProvider | None = None,
        notifier: Notifier | None = None,
        generator: TagGenerator | None = None,
        reader: TagReader | None = None,
    ) -> None:
        self._config = config
        self._root_provider = root_provider
        self._notifier = notifier or ConsoleNotifier(log_level=config.log_level)
        self._generator = generator or self._run_ctags
        self._reader = reader or read_tag_lines

        self._opened_root: Path | None = None
        self._root: Path | None = None
        self._store: TagStore | None = None
        self._status = IndexStatus.EMPTY
        # Bumped on every reset; completions from an older epoch are dropped.
        self._epoch = 0

    # -- lifecycle ---------------------------------------------------------

    def open(self, root: Path) -> None:
        """Start managing the index of root."""
        self._opened_root = root
        self._reset(root)

    def close(self) -> None:
        """Forget the root, its store and any in-flight completion."""
        self._opened_root = None
        self._root = None
        self._store = None
        self._status = IndexStatus.EMPTY
        self._epoch += 1

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    # -- read-only state ---------------------------------------------------

    @property
    def status(self) -> IndexStatus:
        return self._status

    @property
    def root(self) -> Path | None:
        return self._root

    @property
    def tag_path(self) -> Path:
        """Tag file location for the active root."""
        return self._require_root() / self._config.tag_file_name

    @property
    def store(self) -> TagStore:
        self._reset_if_needed()
        assert self._store is not None
        return self._store

    # -- operations --------------------------------------------------------

    async def request_generate(self) -> IndexStatus:
        """Run ctags for the active root, then load the result.

        A no-op while a generation or load is already in flight. Failures
        are reported through the notifier and leave the status EMPTY.

        Returns:
            The status once this request has finished.
        """
        self._reset_if_needed()
        if is_busy(self._status):
            self._notifier.debug(f"Index is {self._status.value}; generate request ignored")
            return self._status

        root = self._require_root()
        epoch = self._epoch
        self._status = IndexStatus.GENERATING
        self._notifier.info("Generating ctag file...")

        result = await self._generator(root)
        if epoch != self._epoch:
            return self._status

        if not result.success:
            error = IndexGenerationError(f"Ctag generation failed: {result.error or 'unknown error'}")
            self._status = IndexStatus.EMPTY
            self._notifier.error(str(error))
            return self._status

        self._status = IndexStatus.GENERATED_ON_DISK
        self._notifier.info("Ctag generation has been completed. Loading the tag file now...")
        return await self._load(epoch)

    async def request_load(self) -> IndexStatus:
        """Load the tag file of the active root into memory.

        Returns immediately when the index is already loaded, or when a
        generation or load is in flight (that request finishes the load).
        Size-cap and read failures are reported through the notifier and
        leave the status EMPTY.

        Returns:
            The status once this request has finished.

        Raises:
            IndexMissingError: If the tag file does not exist.
        """
        self._reset_if_needed()
        match self._status:
            case IndexStatus.LOADED | IndexStatus.LOADING | IndexStatus.GENERATING:
                return self._status
            case IndexStatus.EMPTY | IndexStatus.GENERATED_ON_DISK:
                pass
            case _:
                assert_never(self._status)

        if not file_exists(self.tag_path):
            raise IndexMissingError(
                f"Cannot read ctag file {self.tag_path}. Run the generate command first."
            )
        return await self._load(self._epoch)

    def search(self, query: str | None) -> list[str]:
        """Search the loaded index.

        Raises:
            IndexNotReadyError: If the index is not loaded yet.
            QueryEmptyError: If query is empty.
            SymbolNotFoundError: If nothing matches.
        """
        self._reset_if_needed()
        match self._status:
            case IndexStatus.LOADED:
                assert self._store is not None
                return search_tags(query, self._store)
            case (
                IndexStatus.EMPTY
                | IndexStatus.GENERATING
                | IndexStatus.GENERATED_ON_DISK
                | IndexStatus.LOADING
            ):
                raise IndexNotReadyError(
                    "Tag index is not loaded yet. Please wait for a while and try again."
                )
            case _:
                assert_never(self._status)

    # -- internals ---------------------------------------------------------

    async def _load(self, epoch: int) -> IndexStatus:
        self._status = IndexStatus.LOADING
        root = self._require_root()
        path = self.tag_path

        try:
            size = file_size(path)
        except OSError as exc:
            return self._fail_load(IndexLoadError(f"Error on loading ctag info: {exc}"))

        limit = self._config.max_tag_file_bytes
        if size > limit:
            error = IndexTooLargeError(
                f"Can't load ctag file larger than {limit:,} bytes "
                f"({size:,} bytes on disk). Loading has been cancelled.",
                size=size,
                limit=limit,
            )
            self._status = IndexStatus.EMPTY
            self._notifier.error(str(error))
            return self._status

        loaded = TagStore(root)
        try:
            async with aclosing(self._reader(path)) as lines:
                async for line in lines:
                    if epoch != self._epoch:
                        return self._status
                    loaded.add(line)
        except OSError as exc:
            if epoch != self._epoch:
                return self._status
            return self._fail_load(IndexLoadError(f"Error on loading ctag info: {exc}"))

        if epoch != self._epoch:
            return self._status
        self._store = loaded
        self._status = IndexStatus.LOADED
        self._notifier.debug(f"Loaded {len(loaded)} tags from {path}")
        return self._status

    def _fail_load(self, error: IndexLoadError) -> IndexStatus:
        self._store = TagStore(self._require_root())
        self._status = IndexStatus.EMPTY
        self._notifier.error(str(error))
        return self._status

    async def _run_ctags(self, root: Path) -> ToolResult:
        try:
            argv = ctags_argv(
                self._config.ctags_command,
                self._config.generate_options,
                "-f",
                self._config.tag_file_name,
            )
        except ConfigError as exc:
            return ToolResult(success=False, output="", error=str(exc))
        return await run_process(argv, root)

    def _active_root(self) -> Path | None:
        if self._root_provider is not None:
            return self._root_provider()
        return self._opened_root

    def _reset_if_needed(self) -> None:
        active = self._active_root()
        if active is None:
            raise NoWorkspaceError("No workspace root is open")
        if active != self._root:
            self._reset(active)

    def _reset(self, root: Path) -> None:
        self._root = root
        self._store = TagStore(root)
        self._status = IndexStatus.EMPTY
        self._epoch += 1

    def _require_root(self) -> Path:
        if self._root is None:
            raise NoWorkspaceError("No workspace root is open")
        return self._root
