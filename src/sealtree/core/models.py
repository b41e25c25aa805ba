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
from enum import Enum
from pathlib import Path

from .errors import ErrorKind


@dataclass(frozen=True)
class FileTask:
    source_path: Path
    relative_path: str


@dataclass(frozen=True)
class TargetLocation:
    directory: Path
    file_name: str

    @property
    def path(self) -> Path:
        return self.directory / self.file_name


class OutcomeStatus(str, Enum):
    WRITTEN = "written"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class Outcome:
    source_path: Path
    target_path: Path | None
    status: OutcomeStatus
    bytes_written: int = 0
    error_kind: ErrorKind | None = None
    detail: str | None = None

    @classmethod
    def written(cls, task: FileTask, target_path: Path, bytes_written: int) -> Outcome:
        return cls(
            source_path=task.source_path,
            target_path=target_path,
            status=OutcomeStatus.WRITTEN,
            bytes_written=bytes_written,
        )

    @classmethod
    def skipped(cls, task: FileTask, target_path: Path) -> Outcome:
        return cls(
            source_path=task.source_path,
            target_path=target_path,
            status=OutcomeStatus.SKIPPED,
        )

    @classmethod
    def failed(
        cls,
        task: FileTask,
        target_path: Path | None,
        *,
        kind: ErrorKind,
        detail: str,
    ) -> Outcome:
        return cls(
            source_path=task.source_path,
            target_path=target_path,
            status=OutcomeStatus.FAILED,
            error_kind=kind,
            detail=detail,
        )


@dataclass(frozen=True)
class BatchReport:
    """Aggregated result of one batch run, one outcome per discovered file."""

    source_root: Path
    target_root: Path
    outcomes: tuple[Outcome, ...]
    recipient_count: int = 0

    def _with_status(self, status: OutcomeStatus) -> tuple[Outcome, ...]:
        return tuple(outcome for outcome in self.outcomes if outcome.status is status)

    @property
    def written(self) -> tuple[Outcome, ...]:
        return self._with_status(OutcomeStatus.WRITTEN)

    @property
    def skipped(self) -> tuple[Outcome, ...]:
        return self._with_status(OutcomeStatus.SKIPPED)

    @property
    def failed(self) -> tuple[Outcome, ...]:
        return self._with_status(OutcomeStatus.FAILED)

    @property
    def bytes_written(self) -> int:
        return sum(outcome.bytes_written for outcome in self.outcomes)

    @property
    def ok(self) -> bool:
        return not self.failed
