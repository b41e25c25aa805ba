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
import os

from rich.progress import Progress, TaskID

from ...batch import run_batch
from ...batch.coordinator import JOBS_ENV
from ...config import AppConfig, load_app_config
from ...core.models import Outcome
from ...crypto import decrypt_file
from ...crypto.decrypt import DEFAULT_OUTPUT_NAME
from ..core.common import EXIT_OK, EXIT_PARTIAL
from ..core.types import DecryptArgs, EncryptArgs
from ..ui import console, console_err, progress
from ..ui.summary import print_batch_summary, print_decrypt_summary, print_outcome

# The external interface takes at least two recipients' public keys.
MIN_KEY_FILES = 2


def run_encrypt_command(args: EncryptArgs, *, config: AppConfig | None = None) -> int:
    if len(args.keys) < MIN_KEY_FILES:
        raise ValueError(f"at least {MIN_KEY_FILES} public key files are required (--key)")
    config = config or load_app_config(args.config)
    chunk_size = config.encrypt.chunk_size if args.chunk_size is None else args.chunk_size
    if chunk_size <= 0:
        raise ValueError("chunk size must be a positive integer")
    jobs = args.jobs
    if jobs is None and not os.environ.get(JOBS_ENV, "").strip():
        jobs = config.encrypt.jobs
    quiet = args.quiet or config.ui.quiet
    _apply_ui_config(config)

    with progress(quiet=quiet) as progress_bar:
        tracker = _ProgressTracker(progress_bar)
        report = run_batch(
            args.source,
            args.target,
            args.keys,
            jobs=jobs,
            chunk_size=chunk_size,
            gpg_path=config.encrypt.gpg_path,
            on_start=tracker.start,
            on_outcome=functools.partial(_observe_outcome, tracker, quiet=quiet),
        )
    print_batch_summary(report, quiet=quiet)
    return EXIT_OK if report.ok else EXIT_PARTIAL


def run_decrypt_command(args: DecryptArgs, *, config: AppConfig | None = None) -> int:
    config = config or load_app_config(args.config)
    _apply_ui_config(config)
    output_path = decrypt_file(
        args.key,
        args.input,
        args.target,
        output_name=args.output_name or DEFAULT_OUTPUT_NAME,
        passphrase=args.passphrase,
        gpg_path=config.encrypt.gpg_path,
    )
    print_decrypt_summary(output_path, quiet=args.quiet or config.ui.quiet)
    return EXIT_OK


class _ProgressTracker:
    def __init__(self, progress_bar: Progress | None) -> None:
        self._progress = progress_bar
        self._task_id: TaskID | None = None

    def start(self, total: int) -> None:
        if self._progress is None:
            return
        self._task_id = self._progress.add_task("Encrypting files...", total=total)

    def advance(self) -> None:
        if self._progress is None or self._task_id is None:
            return
        self._progress.advance(self._task_id)


def _observe_outcome(tracker: _ProgressTracker, outcome: Outcome, *, quiet: bool) -> None:
    tracker.advance()
    print_outcome(outcome, quiet=quiet)


def _apply_ui_config(config: AppConfig) -> None:
    if config.ui.no_color:
        console.no_color = True
        console_err.no_color = True
