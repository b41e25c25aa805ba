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

from rich.markup import escape

from ...core.models import BatchReport, Outcome, OutcomeStatus
from . import build_failure_table, build_kv_table, console, console_err, panel


def print_outcome(outcome: Outcome, *, quiet: bool) -> None:
    if outcome.status is OutcomeStatus.FAILED:
        console_err.print(f"[error]Failed:[/error] {escape(outcome.detail or '')}")
        return
    if quiet:
        return
    if outcome.status is OutcomeStatus.WRITTEN:
        console.print(
            f"[success]Encrypted[/success] {escape(str(outcome.source_path))} "
            f"[muted]->[/muted] {escape(str(outcome.target_path))}"
        )
    else:
        console.print(f"[muted]Skipped (exists)[/muted] {escape(str(outcome.target_path))}")


def print_batch_summary(report: BatchReport, *, quiet: bool) -> None:
    if report.failed:
        rows = [
            (outcome.error_kind.value if outcome.error_kind else "error", outcome.detail or "")
            for outcome in report.failed
        ]
        console_err.print(panel("Failures", build_failure_table(rows), style="error"))
    if quiet:
        return
    rows = [
        ("Source", str(report.source_root)),
        ("Target", str(report.target_root)),
        ("Recipients", str(report.recipient_count)),
        ("Written", str(len(report.written))),
        ("Skipped", str(len(report.skipped))),
        ("Failed", str(len(report.failed))),
        ("Bytes written", f"{report.bytes_written:,}"),
    ]
    style = "success" if report.ok else "warning"
    console.print(panel("Encryption summary", build_kv_table(rows), style=style))


def print_decrypt_summary(output_path: Path, *, quiet: bool) -> None:
    if quiet:
        return
    console.print(panel("Decryption summary", build_kv_table([("Output", str(output_path))])))
