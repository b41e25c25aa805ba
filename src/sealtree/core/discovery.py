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

import os
from collections.abc import Iterator
from pathlib import Path

from .errors import DiscoveryError, describe_os_error
from .models import FileTask
from .paths import is_encrypted_output


def discover_files(source_root: str | Path) -> Iterator[FileTask]:
    """Yield every non-directory entry under ``source_root`` that is not encrypted output.

    The walk raises :class:`DiscoveryError` as soon as the root or any
    subdirectory cannot be listed. Callers that need all-or-nothing semantics
    should materialize the iterator before acting on it.
    """
    root = Path(source_root).expanduser()
    if not root.is_dir():
        raise DiscoveryError(root, "source directory not found")
    try:
        with os.scandir(root):
            pass
    except OSError as exc:
        raise DiscoveryError(root, f"unable to read source directory ({describe_os_error(exc)})")
    return _walk(root)


def _walk(root: Path) -> Iterator[FileTask]:
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        dirnames.sort()
        base = Path(dirpath)
        for name in sorted(filenames):
            path = base / name
            relative = path.relative_to(root).as_posix()
            if is_encrypted_output(relative):
                continue
            yield FileTask(source_path=path, relative_path=relative)


def _raise_walk_error(exc: OSError) -> None:
    raise DiscoveryError(exc.filename, f"unable to read directory ({describe_os_error(exc)})")
