"""Candidate labels and resolution of a picked label back to its tag line."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence

from ctagnav.navigation import NavigationTarget, Navigator
from ctagnav.tags.parser import TagRecord, parse_tag_line

Picker = Callable[[list[str]], Awaitable[str | None]]


def render_label(record: TagRecord, show_path: bool) -> str:
    """Display label for record: the symbol, optionally followed by its file."""
    if show_path:
        return f"{record.symbol}\t{record.file_path}"
    return record.symbol


def render_labels(lines: Sequence[str], show_path: bool) -> list[str]:
    """Labels for every parseable line, in input order."""
    labels: list[str] = []
    for line in lines:
        record = parse_tag_line(line)
        if record is not None:
            labels.append(render_label(record, show_path))
    return labels


def resolve_label(lines: Sequence[str], label: str | None) -> str | None:
    """Map a picked label back to the raw line it was rendered from.

    An exact label match wins. Otherwise the first line that starts with the
    label is used, which covers labels the display layer shortened.

    Returns:
        The originating raw line, or None for no selection / no match.
    """
    if not label:
        return None

    for line in lines:
        record = parse_tag_line(line)
        if record is None:
            continue
        if label in (render_label(record, True), render_label(record, False)):
            return line

    for line in lines:
        if line.startswith(label) and parse_tag_line(line) is not None:
            return line
    return None


def target_for(line: str) -> NavigationTarget | None:
    """Navigation target (file, 0-based line) of a raw tag line."""
    record = parse_tag_line(line)
    if record is None:
        return None
    return NavigationTarget(file_path=record.file_path, line_number=record.line_number)


async def pick_and_navigate(
    lines: Sequence[str],
    *,
    show_path: bool,
    picker: Picker,
    navigator: Navigator,
) -> NavigationTarget | None:
    """Let the user pick one of lines and reveal it.

    Returns:
        The revealed target, or None when nothing was picked.

    Raises:
        NavigationTargetMissingError: If the navigator cannot open the file.
    """
    labels = render_labels(lines, show_path)
    if not labels:
        return None

    chosen = await picker(labels)
    line = resolve_label(lines, chosen)
    if line is None:
        return None

    target = target_for(line)
    if target is None:
        return None
    navigator.reveal(target)
    return target
