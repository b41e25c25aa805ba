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

from ..core.errors import DecryptionError, describe_os_error
from .gpg import GpgError, get_gpg_path, gpg_command, run_gpg, temporary_homedir

DEFAULT_OUTPUT_NAME = "decrypted"


def decrypt_file(
    private_key_path: str | Path,
    encrypted_path: str | Path,
    target_dir: str | Path,
    *,
    output_name: str = DEFAULT_OUTPUT_NAME,
    passphrase: str | None = None,
    gpg_path: str | None = None,
) -> Path:
    """Decrypt one envelope with one private key and write the plaintext to ``target_dir``."""
    key_path = Path(private_key_path).expanduser()
    source = Path(encrypted_path).expanduser()
    target = Path(target_dir).expanduser()
    if not key_path.is_file():
        raise DecryptionError(key_path, "private key file not found")
    if not source.is_file():
        raise DecryptionError(source, "encrypted file not found")
    if not output_name or Path(output_name).name != output_name:
        raise DecryptionError(None, f"output name must be a plain file name, got {output_name!r}")
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        detail = f"unable to create directory ({describe_os_error(exc)})"
        raise DecryptionError(target, detail) from exc
    output_path = target / output_name

    gpg = get_gpg_path(gpg_path)
    with temporary_homedir(gpg) as homedir:
        loopback = ["--pinentry-mode", "loopback"]
        secret = None
        if passphrase is not None:
            loopback.extend(("--passphrase-fd", "0"))
            secret = passphrase.encode("utf-8")
        try:
            run_gpg(gpg_command(gpg, homedir, *loopback, "--import", str(key_path)), secret)
        except GpgError as exc:
            raise DecryptionError(key_path, f"unable to import private key ({exc})") from exc
        cmd = gpg_command(
            gpg,
            homedir,
            *loopback,
            "--yes",
            "--output",
            str(output_path),
            "--decrypt",
            str(source),
        )
        try:
            run_gpg(cmd, secret)
        except GpgError as exc:
            raise DecryptionError(source, f"decryption failed ({exc})") from exc
    return output_path
