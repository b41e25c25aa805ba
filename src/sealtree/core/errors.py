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

"""Classified errors raised by the batch pipeline.

Fatal kinds (invalid roots, key loading, discovery) abort a run before any file
is processed. Per-file kinds derive from :class:`TaskError` and are converted
into failed outcomes at the task boundary.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class ErrorKind(str, Enum):
    INVALID_INPUT_PATH = "invalid_input_path"
    KEY_LOAD_FAILURE = "key_load_failure"
    DISCOVERY_FAILURE = "discovery_failure"
    TASK_IO_FAILURE = "task_io_failure"
    ENCRYPTION_FAILURE = "encryption_failure"
    TARGET_COLLISION = "target_collision"
    DECRYPTION_FAILURE = "decryption_failure"


class SealtreeError(RuntimeError):
    kind: ErrorKind

    def __init__(self, path: str | Path | None, detail: str) -> None:
        self.path = None if path is None else str(path)
        self.detail = detail.strip() or "unknown error"
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.path is None:
            return self.detail
        return f"{self.detail}: {self.path}"


class InvalidInputPathError(SealtreeError):
    kind = ErrorKind.INVALID_INPUT_PATH


class KeyLoadError(SealtreeError):
    kind = ErrorKind.KEY_LOAD_FAILURE


class DiscoveryError(SealtreeError):
    kind = ErrorKind.DISCOVERY_FAILURE


class TaskError(SealtreeError):
    """Base for failures that only affect a single file."""


class TaskIOError(TaskError):
    kind = ErrorKind.TASK_IO_FAILURE


class EncryptionError(TaskError):
    kind = ErrorKind.ENCRYPTION_FAILURE


class DecryptionError(SealtreeError):
    kind = ErrorKind.DECRYPTION_FAILURE


def describe_os_error(exc: OSError) -> str:
    return exc.strerror or str(exc) or exc.__class__.__name__
