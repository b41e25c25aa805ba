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

from dataclasses import dataclass


@dataclass
class EncryptArgs:
    """Typed container for encrypt command arguments."""

    source: str
    target: str
    keys: list[str]
    config: str | None = None
    jobs: str | None = None
    chunk_size: int | None = None
    debug: bool = False
    quiet: bool = False


@dataclass
class DecryptArgs:
    """Typed container for decrypt command arguments."""

    key: str
    input: str
    target: str
    output_name: str | None = None
    passphrase: str | None = None
    config: str | None = None
    quiet: bool = False


@dataclass(frozen=True)
class GlobalOptions:
    """Options given before the subcommand, shared through ``ctx.obj``."""

    config: str | None = None
    debug: bool = False
    quiet: bool = False
