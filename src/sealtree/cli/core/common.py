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

"""Shared glue between typer commands and the flows they run.

Every command ends in :func:`run_flow`, which maps the flow's result onto the
process exit status: ``EXIT_OK`` when every file was handled, ``EXIT_PARTIAL``
when some files failed and ``EXIT_FATAL`` when the run could not proceed.
"""

from __future__ import annotations

import importlib.metadata
from collections.abc import Callable

import typer
from rich.markup import escape
from rich.traceback import install as install_rich_traceback

from ...core.errors import ErrorKind
from ..ui import console_err
from .types import GlobalOptions

EXIT_OK = 0
EXIT_PARTIAL = 1
EXIT_FATAL = 2

_FATAL_ERRORS = (OSError, RuntimeError, ValueError, LookupError)


def run_flow(flow: Callable[[], int], *, debug: bool) -> None:
    if debug:
        install_rich_traceback(show_locals=True)
    try:
        code = flow()
    except _FATAL_ERRORS as exc:
        if debug:
            raise
        report_fatal(exc)
        raise typer.Exit(code=EXIT_FATAL) from exc
    if code != EXIT_OK:
        raise typer.Exit(code=code)


def report_fatal(exc: BaseException) -> None:
    message = escape(str(exc) or exc.__class__.__name__)
    kind: ErrorKind | None = getattr(exc, "kind", None)
    if kind is not None:
        message = f"{message} [muted]({kind.value.replace('_', ' ')})[/muted]"
    console_err.print(f"[error]Error:[/error] {message}")


def global_options(ctx: typer.Context) -> GlobalOptions:
    options = ctx.find_object(GlobalOptions)
    return options if options is not None else GlobalOptions()


def package_version() -> str:
    try:
        return importlib.metadata.version("sealtree")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0"
