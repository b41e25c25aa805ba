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

import re
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from ..core.errors import KeyLoadError, describe_os_error
from .gpg import GpgError, get_gpg_path, gpg_command, run_gpg, temporary_homedir

_STATUS_PREFIX = "[GNUPG:] "
_COLON_ESCAPE_RE = re.compile(r"\\x([0-9a-fA-F]{2})")
_SECRET_RECORDS = frozenset({"sec", "ssb"})


@dataclass(frozen=True)
class Recipient:
    fingerprint: str
    user_ids: tuple[str, ...]
    source_file: Path


@dataclass(frozen=True)
class RecipientSet:
    """Recipients of one batch run, in key-file order.

    ``homedir`` is the private keyring the recipients were imported into; it is
    only valid inside the :func:`load_recipients` block that produced the set.
    """

    recipients: tuple[Recipient, ...]
    homedir: Path
    gpg_path: str

    def __len__(self) -> int:
        return len(self.recipients)

    def __iter__(self) -> Iterator[Recipient]:
        return iter(self.recipients)

    @property
    def fingerprints(self) -> tuple[str, ...]:
        return tuple(recipient.fingerprint for recipient in self.recipients)


@contextmanager
def load_recipients(
    key_paths: Sequence[str | Path],
    *,
    gpg_path: str | None = None,
) -> Iterator[RecipientSet]:
    paths = [Path(path).expanduser() for path in key_paths]
    if not paths:
        raise KeyLoadError(None, "at least one public key file is required")
    gpg = get_gpg_path(gpg_path)
    with temporary_homedir(gpg) as homedir:
        imported: list[tuple[str, Path]] = []
        for path in paths:
            fingerprints = _import_key_file(gpg, homedir, path)
            imported.extend((fingerprint, path) for fingerprint in fingerprints)
        user_ids = _list_user_ids(gpg, homedir)
        recipients = tuple(
            Recipient(
                fingerprint=fingerprint,
                user_ids=tuple(user_ids.get(fingerprint, ())),
                source_file=path,
            )
            for fingerprint, path in imported
        )
        yield RecipientSet(recipients=recipients, homedir=homedir, gpg_path=gpg)


def _import_key_file(gpg: str, homedir: Path, path: Path) -> list[str]:
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise KeyLoadError(path, f"unable to read key file ({describe_os_error(exc)})") from exc

    show_cmd = gpg_command(gpg, homedir, "--with-colons", "--show-keys")
    try:
        listing = run_gpg(show_cmd, raw)
    except GpgError as exc:
        raise KeyLoadError(path, f"invalid key ring ({exc})") from exc
    records = listing_record_types(listing.stdout.decode("utf-8", errors="replace"))
    if records & _SECRET_RECORDS:
        raise KeyLoadError(path, "expected a public key, found secret key material")
    if "pub" not in records:
        raise KeyLoadError(path, "invalid key ring (no public key found)")

    cmd = gpg_command(gpg, homedir, "--status-fd", "1", "--import")
    try:
        proc = run_gpg(cmd, raw)
    except GpgError as exc:
        raise KeyLoadError(path, f"unable to import key ring ({exc})") from exc
    fingerprints = parse_import_status(proc.stdout.decode("utf-8", errors="replace"))
    if not fingerprints:
        raise KeyLoadError(path, "key ring contains no public keys")
    return fingerprints


def listing_record_types(text: str) -> set[str]:
    """Record types present in ``gpg --with-colons`` output, e.g. ``pub`` or ``sec``."""
    return {line.split(":", 1)[0] for line in text.splitlines() if ":" in line}


def parse_import_status(text: str) -> list[str]:
    fingerprints: list[str] = []
    for line in text.splitlines():
        if not line.startswith(_STATUS_PREFIX):
            continue
        parts = line[len(_STATUS_PREFIX) :].split()
        if len(parts) >= 3 and parts[0] == "IMPORT_OK":
            fingerprints.append(parts[2].upper())
    return fingerprints


def _list_user_ids(gpg: str, homedir: Path) -> dict[str, list[str]]:
    cmd = gpg_command(
        gpg,
        homedir,
        "--trust-model",
        "always",
        "--with-colons",
        "--with-fingerprint",
        "--list-keys",
    )
    try:
        proc = run_gpg(cmd)
    except GpgError as exc:
        raise KeyLoadError(homedir, f"unable to list imported keys ({exc})") from exc
    return parse_colon_listing(proc.stdout.decode("utf-8", errors="replace"))


def parse_colon_listing(text: str) -> dict[str, list[str]]:
    """Map primary-key fingerprints to user IDs from ``gpg --with-colons`` output."""
    user_ids: dict[str, list[str]] = {}
    current: str | None = None
    expect_primary = False
    for line in text.splitlines():
        fields = line.split(":")
        record = fields[0]
        if record == "pub":
            expect_primary = True
            current = None
        elif record == "fpr" and expect_primary and len(fields) > 9:
            current = fields[9].upper()
            user_ids.setdefault(current, [])
            expect_primary = False
        elif record == "uid" and current is not None and len(fields) > 9:
            user_ids[current].append(_unescape_colon_field(fields[9]))
        elif record == "sub":
            expect_primary = False
    return user_ids


def _unescape_colon_field(value: str) -> str:
    return _COLON_ESCAPE_RE.sub(lambda match: chr(int(match.group(1), 16)), value)
