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

"""Batch encryption of a source tree into a mirrored target tree.

Each discovered file goes through ``mapped -> skipped | encrypting -> written |
failed``. Per-file failures are recorded as outcomes and never stop the batch;
only invalid roots, key loading and discovery abort a run, and they do so
before any file is touched.
"""

from __future__ import annotations

import concurrent.futures
import functools
import os
import queue
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from ..core.discovery import discover_files
from ..core.errors import ErrorKind, TaskError, TaskIOError, describe_os_error
from ..core.models import BatchReport, FileTask, Outcome
from ..core.paths import map_target
from ..crypto.engine import DEFAULT_CHUNK_SIZE, encrypt_file
from ..crypto.keyring import load_recipients
from .provision import ensure_directory, validate_roots

JOBS_ENV = "SEALTREE_JOBS"
_DEFAULT_JOBS_CAP = 16

Encryptor = Callable[[Path], bytes]
OutcomeCallback = Callable[[Outcome], None]


def run_batch(
    source_root: str | Path,
    target_root: str | Path,
    key_paths: Sequence[str | Path],
    *,
    jobs: int | str | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    gpg_path: str | None = None,
    on_start: Callable[[int], None] | None = None,
    on_outcome: OutcomeCallback | None = None,
) -> BatchReport:
    source, target = validate_roots(source_root, target_root)
    with load_recipients(key_paths, gpg_path=gpg_path) as recipients:
        tasks = list(discover_files(source))
        if on_start is not None:
            on_start(len(tasks))
        encryptor = functools.partial(encrypt_file, recipients, chunk_size=chunk_size)
        outcomes = execute_tasks(tasks, target, encryptor, jobs=jobs, on_outcome=on_outcome)
        recipient_count = len(recipients)
    return BatchReport(
        source_root=source,
        target_root=target,
        outcomes=tuple(sorted(outcomes, key=lambda outcome: str(outcome.source_path))),
        recipient_count=recipient_count,
    )


def execute_tasks(
    tasks: Iterable[FileTask],
    target_root: str | Path,
    encryptor: Encryptor,
    *,
    jobs: int | str | None = None,
    on_outcome: OutcomeCallback | None = None,
) -> list[Outcome]:
    target = Path(target_root)
    runnable, outcomes = _split_collisions(tasks, target)
    if on_outcome is not None:
        for outcome in outcomes:
            on_outcome(outcome)
    if not runnable:
        return outcomes

    # Sized to the task count so a worker never blocks on reporting.
    results: queue.Queue[Outcome] = queue.Queue(maxsize=len(runnable))
    worker = functools.partial(
        _run_and_report,
        target_root=target,
        encryptor=encryptor,
        results=results,
    )
    workers = resolve_workers(len(runnable), jobs)
    with concurrent.futures.ThreadPoolExecutor(
        max_workers=workers,
        thread_name_prefix="sealtree",
    ) as executor:
        for task in runnable:
            executor.submit(worker, task)
        for _ in range(len(runnable)):
            outcome = results.get()
            outcomes.append(outcome)
            if on_outcome is not None:
                on_outcome(outcome)
    return outcomes


def process_task(task: FileTask, target_root: str | Path, encryptor: Encryptor) -> Outcome:
    location = map_target(task.relative_path, target_root)
    target_path = location.path
    if target_path.exists():
        return Outcome.skipped(task, target_path)
    try:
        ensure_directory(location.directory)
        envelope = encryptor(task.source_path)
        written = write_envelope(target_path, envelope)
    except FileExistsError:
        # Another writer created the target after the existence check.
        return Outcome.skipped(task, target_path)
    except TaskError as exc:
        return Outcome.failed(task, target_path, kind=exc.kind, detail=str(exc))
    return Outcome.written(task, target_path, written)


def write_envelope(path: Path, envelope: bytes) -> int:
    """Create ``path`` exclusively and write the whole envelope to it.

    Raises ``FileExistsError`` when the path already exists. A failed write
    removes the partial file so a later run retries it.
    """
    try:
        handle = path.open("xb")
    except FileExistsError:
        raise
    except OSError as exc:
        detail = f"unable to create output file ({describe_os_error(exc)})"
        raise TaskIOError(path, detail) from exc
    try:
        with handle:
            handle.write(envelope)
    except OSError as exc:
        path.unlink(missing_ok=True)
        raise TaskIOError(path, f"write failed ({describe_os_error(exc)})") from exc
    return len(envelope)


def resolve_workers(task_count: int, requested: int | str | None = None) -> int:
    value: int | str | None = requested
    source = "jobs"
    if value is None:
        raw = os.environ.get(JOBS_ENV, "").strip()
        if raw:
            value = raw
            source = JOBS_ENV
    workers = _parse_jobs(value, source=source)
    if workers is None:
        cpu = os.cpu_count() or 1
        workers = min(cpu * 2, _DEFAULT_JOBS_CAP)
    return max(1, min(workers, task_count))


def _parse_jobs(value: int | str | None, *, source: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip().lower()
        if text == "auto":
            return None
        try:
            value = int(text)
        except ValueError:
            raise ValueError(f"{source} must be a positive integer or 'auto'") from None
    if isinstance(value, bool) or value <= 0:
        raise ValueError(f"{source} must be a positive integer or 'auto'")
    return value


def _run_and_report(
    task: FileTask,
    *,
    target_root: Path,
    encryptor: Encryptor,
    results: queue.Queue[Outcome],
) -> None:
    # Every worker reports exactly once, or the coordinator would wait forever.
    try:
        outcome = process_task(task, target_root, encryptor)
    except OSError as exc:
        outcome = Outcome.failed(
            task,
            None,
            kind=ErrorKind.TASK_IO_FAILURE,
            detail=f"{describe_os_error(exc)}: {task.source_path}",
        )
    except Exception as exc:
        outcome = Outcome.failed(
            task,
            None,
            kind=ErrorKind.ENCRYPTION_FAILURE,
            detail=f"unexpected error ({exc!r}): {task.source_path}",
        )
    results.put(outcome)


def _split_collisions(
    tasks: Iterable[FileTask],
    target_root: Path,
) -> tuple[list[FileTask], list[Outcome]]:
    """Keep the first task per target path (in source order); fail the rest."""
    claimed: dict[Path, FileTask] = {}
    runnable: list[FileTask] = []
    rejected: list[Outcome] = []
    for task in sorted(tasks, key=lambda item: item.relative_path):
        target_path = map_target(task.relative_path, target_root).path
        owner = claimed.get(target_path)
        if owner is None:
            claimed[target_path] = task
            runnable.append(task)
            continue
        rejected.append(
            Outcome.failed(
                task,
                target_path,
                kind=ErrorKind.TARGET_COLLISION,
                detail=f"same target as {owner.source_path}: {task.source_path}",
            )
        )
    return runnable, rejected
