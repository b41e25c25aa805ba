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

"""Streaming encryption pipeline.

Plaintext is fed in fixed-size chunks to a gpg process encrypting to every
recipient with ASCII armor. Closing the encrypt writer is the single finalize
step: gpg flushes the trailing ciphertext and the armor footer before it
exits.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import BinaryIO

from ..core.errors import EncryptionError, TaskIOError, describe_os_error
from .gpg import ByteSink, GpgEncryptWriter, GpgError, gpg_command
from .keyring import RecipientSet

DEFAULT_CHUNK_SIZE = 4096


def encrypt_command(recipients: RecipientSet) -> list[str]:
    recipient_args: list[str] = []
    for fingerprint in recipients.fingerprints:
        recipient_args.extend(("--recipient", fingerprint))
    return gpg_command(
        recipients.gpg_path,
        recipients.homedir,
        "--trust-model",
        "always",
        "--no-textmode",
        "--armor",
        *recipient_args,
        "--encrypt",
    )


def open_encrypt_writer(recipients: RecipientSet, sink: ByteSink) -> GpgEncryptWriter:
    return GpgEncryptWriter(encrypt_command(recipients), sink)


def encrypt_stream(
    recipients: RecipientSet,
    stream: BinaryIO,
    *,
    label: str | Path,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> bytes:
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    if not recipients.recipients:
        raise EncryptionError(label, "no recipients to encrypt to")

    buffer = io.BytesIO()
    try:
        writer = open_encrypt_writer(recipients, buffer)
    except GpgError as exc:
        raise EncryptionError(label, f"unable to start encryption ({exc})") from exc

    try:
        while True:
            try:
                chunk = stream.read(chunk_size)
            except OSError as exc:
                raise TaskIOError(label, f"read failed ({describe_os_error(exc)})") from exc
            if not chunk:
                break
            writer.write(chunk)
        writer.close()
    except GpgError as exc:
        writer.abort()
        raise EncryptionError(label, f"encryption failed ({exc})") from exc
    except BaseException:
        writer.abort()
        raise
    return buffer.getvalue()


def encrypt_file(
    recipients: RecipientSet,
    path: str | Path,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> bytes:
    source = Path(path)
    try:
        handle = source.open("rb")
    except OSError as exc:
        raise TaskIOError(source, f"unable to open file ({describe_os_error(exc)})") from exc
    with handle:
        return encrypt_stream(recipients, handle, label=source, chunk_size=chunk_size)
