"""Typer CLI entry point for ctagnav.

Bridges the synchronous Typer world to the async index internals via asyncio.run().
The terminal stands in for the editor: a numbered table is the quick pick,
and a highlighted excerpt is the revealed document.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated, assert_never

import typer
from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from ctagnav import __version__
from ctagnav.config import CtagsConfig, load_config
from ctagnav.exceptions import (
    CtagnavError,
    IndexMissingError,
    NavigationTargetMissingError,
    QueryEmptyError,
    SymbolNotFoundError,
)
from ctagnav.navigation import ConsoleNavigator, NavigationTarget
from ctagnav.notify import ConsoleNotifier
from ctagnav.outline import OutlineEngine
from ctagnav.tags.manager import IndexStatus, TagIndexManager
from ctagnav.tags.picker import Picker, pick_and_navigate
from ctagnav.tools.file_ops import file_exists, file_size

app = typer.Typer(
    name="ctagnav",
    help="ctagnav: jump to symbols through a ctags index.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()

_CANCEL = "q"

RootOption = Annotated[
    Path | None,
    typer.Option("--root", "-r", help="Workspace root (default: current directory)"),
]
FirstOption = Annotated[
    bool, typer.Option("--first", help="Jump to the first match without prompting")
]


def _error_exit(message: str, hint: str | None = None) -> None:
    """Print a styled error and exit."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    if hint:
        console.print(f"[dim]Hint: {escape(hint)}[/dim]")
    raise typer.Exit(code=1)


def _open_manager(root: Path | None) -> tuple[CtagsConfig, TagIndexManager]:
    project_dir = (root or Path.cwd()).resolve()
    config = load_config(project_dir)
    manager = TagIndexManager(
        config,
        notifier=ConsoleNotifier(Console(stderr=True), log_level=config.log_level),
    )
    manager.open(project_dir)
    return config, manager


def console_picker(first: bool = False) -> Picker:
    """Quick pick rendered as a numbered table, answered on the prompt."""

    async def pick(labels: list[str]) -> str | None:
        if first or len(labels) == 1:
            return labels[0]

        table = Table(border_style="cyan", header_style="bold cyan")
        table.add_column("#", justify="right", style="bold")
        table.add_column("Symbol")
        table.add_column("File", style="dim")
        for i, label in enumerate(labels, start=1):
            symbol, _, file_path = label.partition("\t")
            table.add_row(str(i), escape(symbol), escape(file_path))
        console.print(table)

        choices = [str(i) for i in range(1, len(labels) + 1)] + [_CANCEL]
        answer = Prompt.ask("[bold]Select[/bold]", choices=choices, default="1", show_choices=False)
        if answer == _CANCEL:
            return None
        return labels[int(answer) - 1]

    return pick


@app.command()
def version() -> None:
    """Show the ctagnav version."""
    console.print(f"ctagnav {__version__}")


@app.command()
def generate(root: RootOption = None) -> None:
    """Run ctags over the workspace and load the resulting tag file."""
    try:
        _, manager = _open_manager(root)
        with manager:
            status = asyncio.run(manager.request_generate())
            if status is not IndexStatus.LOADED:
                raise typer.Exit(code=1)
            console.print(
                f"[green]Indexed[/green] [bold]{len(manager.store)}[/bold] tags "
                f"into {escape(str(manager.tag_path))}"
            )
    except CtagnavError as exc:
        _error_exit(str(exc))


@app.command()
def search(
    query: Annotated[
        str | None,
        typer.Argument(help="Symbol fragment, or @fragment to match file paths"),
    ] = None,
    root: RootOption = None,
    first: FirstOption = False,
) -> None:
    """Find a symbol in the tag index and show its definition."""
    try:
        _, manager = _open_manager(root)
        with manager:
            status = asyncio.run(manager.request_load())
            if status is not IndexStatus.LOADED:
                raise typer.Exit(code=1)

            if query is None:
                query = Prompt.ask("[bold]Input the symbol name[/bold]", default="")

            try:
                lines = manager.search(query)
            except QueryEmptyError:
                raise typer.Exit(code=0)

            navigator = ConsoleNavigator(manager.store.root, console)
            target = asyncio.run(
                pick_and_navigate(lines, show_path=True, picker=console_picker(first), navigator=navigator)
            )
            _report(target)
    except SymbolNotFoundError as exc:
        _error_exit(str(exc), hint="Prefix the query with @ to search file paths.")
    except NavigationTargetMissingError as exc:
        _error_exit(str(exc), hint="The tag file may be stale. Run 'ctagnav generate'.")
    except IndexMissingError as exc:
        _error_exit(str(exc), hint="Run 'ctagnav generate' first.")
    except CtagnavError as exc:
        _error_exit(str(exc))


@app.command()
def outline(
    file: Annotated[Path, typer.Argument(help="Source file to outline")],
    first: FirstOption = False,
) -> None:
    """List the symbols of one file and show the chosen one."""
    try:
        config = load_config(Path.cwd().resolve())
        engine = OutlineEngine(
            config,
            notifier=ConsoleNotifier(Console(stderr=True), log_level=config.log_level),
        )
        lines = asyncio.run(engine.outline(file))
        if not lines:
            console.print(f"[yellow]No symbols found in[/yellow] {escape(str(file))}")
            raise typer.Exit(code=0)

        navigator = ConsoleNavigator(Path.cwd().resolve(), console)
        target = asyncio.run(
            pick_and_navigate(lines, show_path=False, picker=console_picker(first), navigator=navigator)
        )
        _report(target)
    except CtagnavError as exc:
        _error_exit(str(exc))


@app.command()
def status(root: RootOption = None) -> None:
    """Show the tag file and index state for the workspace."""
    try:
        config, manager = _open_manager(root)
    except CtagnavError as exc:
        _error_exit(str(exc))
        return

    with manager:
        tag_path = manager.tag_path
        table = Table(title="ctagnav Status", border_style="cyan", header_style="bold cyan")
        table.add_column("Property", style="bold")
        table.add_column("Value")

        table.add_row("Workspace", escape(str(manager.root)))
        table.add_row("Tag file", escape(str(tag_path)))
        table.add_row("Command", escape(f"{config.ctags_command} {config.generate_options}"))

        if file_exists(tag_path):
            table.add_row("Size", f"{file_size(tag_path):,} bytes")
            asyncio.run(manager.request_load())
        else:
            table.add_row("Size", "[dim]Not generated[/dim]")

        table.add_row("Index", _describe(manager.status))
        if manager.status is IndexStatus.LOADED:
            table.add_row("Tags", str(len(manager.store)))

    console.print()
    console.print(table)
    console.print()


def _describe(status: IndexStatus) -> str:
    match status:
        case IndexStatus.EMPTY:
            return "[dim]Empty[/dim]"
        case IndexStatus.GENERATING:
            return "[yellow]Generating[/yellow]"
        case IndexStatus.GENERATED_ON_DISK:
            return "[yellow]Generated[/yellow]"
        case IndexStatus.LOADING:
            return "[yellow]Loading[/yellow]"
        case IndexStatus.LOADED:
            return "[green]Loaded[/green]"
        case _:
            assert_never(status)


def _report(target: NavigationTarget | None) -> None:
    if target is None:
        console.print("[dim]Nothing selected.[/dim]")
