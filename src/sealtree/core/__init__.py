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

from .discovery import discover_files
from .errors import (
    DecryptionError,
    DiscoveryError,
    EncryptionError,
    ErrorKind,
    InvalidInputPathError,
    KeyLoadError,
    SealtreeError,
    TaskError,
    TaskIOError,
)
from .models import BatchReport, FileTask, Outcome, OutcomeStatus, TargetLocation
from .paths import MARKER_EXTENSION, map_target

__all__ = [
    "BatchReport",
    "DecryptionError",
    "DiscoveryError",
    "EncryptionError",
    "ErrorKind",
    "FileTask",
    "InvalidInputPathError",
    "KeyLoadError",
    "MARKER_EXTENSION",
    "Outcome",
    "OutcomeStatus",
    "SealtreeError",
    "TargetLocation",
    "TaskError",
    "TaskIOError",
    "discover_files",
    "map_target",
]
