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

import functools
from pathlib import Path

import typer

from ..core.common import global_options, run_flow
from ..core.types import EncryptArgs
from ..flows.encrypt import run_encrypt_command

_ENCRYPT_HELP = (
    "Encrypt every file under a source folder into a mirrored target folder.\n\n"
    "Files that already have an encrypted counterpart are skipped.\n\n"
    "Examples:\n"
    "  sealtree encrypt -s docs -t vault -k alice.asc -k bob.asc\n"
    "  sealtree encrypt -s docs -t vault -k alice.asc -k bob.asc --jobs 4\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_ENCRYPT_HELP)(encrypt)


def encrypt(
    ctx: typer.Context,
    source: Path = typer.Option(
        ...,
        "--source",
        "-s",
        help="Folder of plaintext files to encrypt (recursive).",
        rich_help_panel="Inputs",
    ),
    target: Path = typer.Option(
        ...,
        "--target",
        "-t",
        help="Folder receiving the mirrored .pgp files (created if missing).",
        rich_help_panel="Outputs",
    ),
    key: list[Path] = typer.Option(
        ...,
        "--key",
        "-k",
        help="Armored public key file of a recipient (repeatable, at least two).",
        rich_help_panel="Encryption",
    ),
    jobs: str | None = typer.Option(
        None,
        "--jobs",
        "-j",
        help="Parallel workers: a positive integer or 'auto'.",
        rich_help_panel="Advanced",
    ),
    chunk_size: int | None = typer.Option(
        None,
        "--chunk-size",
        help="Plaintext bytes fed to the encryptor per write.",
        rich_help_panel="Advanced",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        help="Use this config file.",
        rich_help_panel="Config",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Show tracebacks for errors.",
        rich_help_panel="Debug",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Hide non-error output.",
        rich_help_panel="Behavior",
    ),
) -> None:
    options = global_options(ctx)
    args = EncryptArgs(
        source=str(source),
        target=str(target),
        keys=[str(path) for path in key],
        config=config or options.config,
        jobs=jobs,
        chunk_size=chunk_size,
        debug=debug or options.debug,
        quiet=quiet or options.quiet,
    )
    run_flow(functools.partial(run_encrypt_command, args), debug=args.debug)
