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
import re
from pathlib import Path

from .models import TargetLocation

MARKER_EXTENSION = ".pgp"

# Drive letter ("C:") or UNC share ("\\server\share") at the start of a path.
_VOLUME_PREFIX_RE = re.compile(r"^(?:[A-Za-z]:|[\\/]{2}[^\\/]+[\\/][^\\/]+)")
_SEPARATOR_RE = re.compile(r"[\\/]+")


def strip_volume_prefix(path: str) -> str:
    return _VOLUME_PREFIX_RE.sub("", path, count=1)


def split_segments(path: str) -> list[str]:
    """Split a path on either separator, dropping anchors, '.' and '..' segments."""
    text = strip_volume_prefix(path)
    return [segment for segment in _SEPARATOR_RE.split(text) if segment not in {"", ".", ".."}]


def encrypted_file_name(name: str) -> str:
    stem = name
    dot = name.rfind(".")
    if dot > 0:
        stem = name[:dot]
    return f"{stem}{MARKER_EXTENSION}"


def map_target(source_path: str | os.PathLike[str], target_root: str | Path) -> TargetLocation:
    raw = os.fspath(source_path)
    separator = max(raw.rfind("/"), raw.rfind("\\"))
    directory_part = raw[: separator + 1] if separator >= 0 else ""
    file_part = raw[separator + 1 :]
    if not directory_part:
        # "C:name.txt" is drive-relative; only the name survives.
        file_part = strip_volume_prefix(file_part)
    directory = Path(target_root).joinpath(*split_segments(directory_part))
    return TargetLocation(directory=directory, file_name=encrypted_file_name(file_part))


def is_encrypted_output(path: str) -> bool:
    return MARKER_EXTENSION in path
