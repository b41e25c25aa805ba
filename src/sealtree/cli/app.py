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

import typer
from rich.traceback import install as install_rich_traceback

from ..config import init_user_config
from . import command_registry
from .core.common import EXIT_FATAL, package_version, report_fatal
from .core.types import GlobalOptions
from .ui import configure_ui, console, console_err

app = typer.Typer(
    add_completion=False,
    help="Encrypt a folder tree for several OpenPGP recipients at once.",
)


def _show_version(value: bool) -> None:
    if value:
        console.print(f"sealtree {package_version()}")
        raise typer.Exit()


def _install_user_config(value: bool) -> None:
    if not value:
        return
    try:
        config_path = init_user_config()
    except OSError as exc:
        report_fatal(exc)
        raise typer.Exit(code=EXIT_FATAL) from exc
    console.print(f"User config ready at {config_path}")
    raise typer.Exit()


@app.callback(invoke_without_command=True)
def cli(
    ctx: typer.Context,
    config: str | None = typer.Option(
        None,
        "--config",
        help="Read defaults from this TOML file instead of the user config.",
        rich_help_panel="Global",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Show full tracebacks instead of one-line errors.",
        rich_help_panel="Debug",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Only report failures.",
        rich_help_panel="Global",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output.",
        rich_help_panel="Accessibility",
    ),
    no_animations: bool = typer.Option(
        False,
        "--no-animations",
        help="Show a plain counter instead of an animated progress bar.",
        rich_help_panel="Accessibility",
    ),
    init_config: bool = typer.Option(
        False,
        "--init-config",
        help="Write the default config.toml to the user config directory and exit.",
        callback=_install_user_config,
        is_eager=True,
        rich_help_panel="Config",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_show_version,
        is_eager=True,
        rich_help_panel="Info",
    ),
) -> None:
    _ = (init_config, version)
    configure_ui(no_color=no_color, no_animations=no_animations)
    if debug:
        install_rich_traceback(show_locals=True)
    ctx.obj = GlobalOptions(config=config, debug=debug, quiet=quiet)
    if ctx.invoked_subcommand is None:
        commands = " or ".join(sorted(ctx.command.list_commands(ctx)))
        console_err.print(
            f"[error]Error:[/error] choose a command ({commands}); see `sealtree --help`."
        )
        raise typer.Exit(code=EXIT_FATAL)


command_registry.register(app)


def main() -> None:
    app()
