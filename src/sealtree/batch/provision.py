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

from pathlib import Path

from ..core.errors import InvalidInputPathError, TaskIOError, describe_os_error


def ensure_directory(path: str | Path) -> Path:
    directory = Path(path)
    if directory.is_dir():
        return directory
    if directory.exists():
        raise TaskIOError(directory, "target path exists and is not a directory")
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except (FileExistsError, NotADirectoryError) as exc:
        detail = "target path or one of its parents is not a directory"
        raise TaskIOError(directory, detail) from exc
    except OSError as exc:
        detail = f"unable to create directory ({describe_os_error(exc)})"
        raise TaskIOError(directory, detail) from exc
    return directory


def validate_roots(source_root: str | Path, target_root: str | Path) -> tuple[Path, Path]:
    source = Path(source_root).expanduser()
    target = Path(target_root).expanduser()
    if not source.exists():
        raise InvalidInputPathError(source, "source directory does not exist")
    if not source.is_dir():
        raise InvalidInputPathError(source, "source path is not a directory")
    if target.exists() and not target.is_dir():
        raise InvalidInputPathError(target, "target path is not a directory")
    try:
        ensure_directory(target)
    except TaskIOError as exc:
        raise InvalidInputPathError(target, exc.detail) from exc
    return source, target
