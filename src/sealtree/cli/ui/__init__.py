#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

import sys
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import TextIO

from rich import box
from rich.console import Console, RenderableType
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    ProgressColumn,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.theme import Theme

THEME = Theme(
    {
        "accent": "cyan",
        "panel": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "bold red",
        "muted": "dim",
    }
)


def _is_terminal(stream: TextIO | None) -> bool:
    if stream is None:
        return False
    try:
        return stream.isatty()
    except (OSError, ValueError):
        return False


def _make_console(*, stderr: bool) -> Console:
    stream = sys.__stderr__ if stderr else sys.__stdout__
    return Console(stderr=stderr, theme=THEME, force_terminal=_is_terminal(stream))


console = _make_console(stderr=False)
console_err = _make_console(stderr=True)
_animations = {"enabled": True}


def configure_ui(*, no_color: bool, no_animations: bool = False) -> None:
    console.no_color = no_color
    console_err.no_color = no_color
    _animations["enabled"] = not no_animations


def _progress_columns() -> tuple[ProgressColumn, ...]:
    description = TextColumn("[progress.description]{task.description}")
    if not _animations["enabled"]:
        return (description, MofNCompleteColumn())
    return (
        SpinnerColumn(style="accent"),
        description,
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
    )


@contextmanager
def progress(*, quiet: bool) -> Iterator[Progress | None]:
    """Transient per-file progress bar; ``None`` when quiet."""
    if quiet:
        yield None
        return
    progress_bar = Progress(
        *_progress_columns(),
        console=console,
        transient=True,
        refresh_per_second=10 if _animations["enabled"] else 2,
        disable=not _is_terminal(sys.__stdout__),
    )
    with progress_bar:
        yield progress_bar


def build_kv_table(rows: Sequence[tuple[str, str]]) -> Table:
    table = Table(show_header=False, box=box.SIMPLE)
    table.add_column("Field", style="bold", no_wrap=True)
    table.add_column("Value")
    for key, value in rows:
        table.add_row(key, value)
    return table


def build_failure_table(rows: Sequence[tuple[str, str]]) -> Table:
    table = Table(box=box.SIMPLE)
    table.add_column("Kind", style="error", no_wrap=True)
    table.add_column("Detail")
    for kind, detail in rows:
        table.add_row(kind, detail)
    return table


def panel(title: str, renderable: RenderableType, *, style: str = "panel") -> Panel:
    return Panel(renderable, title=title, title_align="left", border_style=style, padding=(1, 2))


__all__ = [
    "THEME",
    "build_failure_table",
    "build_kv_table",
    "configure_ui",
    "console",
    "console_err",
    "panel",
    "progress",
]
