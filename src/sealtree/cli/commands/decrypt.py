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

from ...crypto.decrypt import DEFAULT_OUTPUT_NAME
from ..core.common import global_options, run_flow
from ..core.types import DecryptArgs
from ..flows.encrypt import run_decrypt_command

_DECRYPT_HELP = (
    "Decrypt a single .pgp file with a private key, to check an encrypted tree.\n\n"
    "Examples:\n"
    "  sealtree decrypt -k alice-secret.asc -i vault/report.pgp -t restored\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_DECRYPT_HELP)(decrypt)


def decrypt(
    ctx: typer.Context,
    key: Path = typer.Option(
        ...,
        "--key",
        "-k",
        help="Private key file (armored or binary).",
        rich_help_panel="Inputs",
    ),
    input_path: Path = typer.Option(
        ...,
        "--input",
        "-i",
        help="Encrypted .pgp file.",
        rich_help_panel="Inputs",
    ),
    target: Path = typer.Option(
        ...,
        "--target",
        "-t",
        help="Folder receiving the decrypted file.",
        rich_help_panel="Outputs",
    ),
    output_name: str | None = typer.Option(
        None,
        "--output-name",
        "-o",
        help=f"Name of the decrypted file (default: {DEFAULT_OUTPUT_NAME}).",
        rich_help_panel="Outputs",
    ),
    passphrase: str | None = typer.Option(
        None,
        "--passphrase",
        help="Passphrase protecting the private key.",
        rich_help_panel="Inputs",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        help="Use this config file.",
        rich_help_panel="Config",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Hide non-error output.",
        rich_help_panel="Behavior",
    ),
) -> None:
    options = global_options(ctx)
    args = DecryptArgs(
        key=str(key),
        input=str(input_path),
        target=str(target),
        output_name=output_name,
        passphrase=passphrase,
        config=config or options.config,
        quiet=quiet or options.quiet,
    )
    run_flow(functools.partial(run_decrypt_command, args), debug=options.debug)
