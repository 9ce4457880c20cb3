"""Duplicate module report."""

import io
import os
from pathlib import Path

from rich.console import Console, Group
from rich.table import Table
from rich.text import Text

from .models import ModuleRevision, SearchResult, SearchResults

_REPORT_WIDTH = 240
# Table borders and padding around the path and version cells.
_TABLE_CHROME = 8


def _relative(revision: ModuleRevision, cwd: Path) -> str:
    return os.path.relpath(revision.path, cwd)


def _module_block(name: str, result: SearchResult, cwd: Path) -> Group:
    title = Text.assemble("📦 ", (name, "green"), " found at multiple directories")
    table = Table(show_header=False)
    table.add_column("path", no_wrap=True, overflow="fold")
    table.add_column("version")
    table.add_row(
        Text(_relative(result, cwd), style="magenta"),
        Text(result.version, style="cyan"),
    )
    for duplicate in result.duplicates:
        table.add_row(
            Text(_relative(duplicate, cwd), style="bright_black"),
            Text(duplicate.version, style="bright_black"),
        )
    return Group(title, table)


def verify_search_results(
    results: SearchResults,
    cwd: str | Path | None = None,
    color: bool = False,
) -> str:
    """Render a report of modules found at more than one path.

    Nothing is printed; an empty string means no duplicates.
    """
    cwd = Path(cwd) if cwd is not None else Path.cwd()
    blocks = [
        _module_block(name, result, cwd)
        for name, result in results.items()
        if result.duplicates
    ]
    if not blocks:
        return ""

    widest = max(
        len(_relative(revision, cwd)) + len(revision.version)
        for result in results.values()
        if result.duplicates
        for revision in (result, *result.duplicates)
    )

    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=max(_REPORT_WIDTH, widest + _TABLE_CHROME),
        force_terminal=color,
        color_system="standard" if color else None,
        highlight=False,
    )
    for block in blocks:
        console.print(block)
    console.print(
        f"⚠️  Found {len(blocks)} duplicated modules, but only the first one found for each will be autolinked.",
        style="yellow",
    )
    console.print(
        "⚠️  Make sure to get rid of unnecessary versions as it may introduce side effects, "
        "especially on the JavaScript side.",
        style="yellow",
    )
    return buffer.getvalue().rstrip("\n")
