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
import shutil
import subprocess
import tempfile
import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

GPG_PATH_ENV = "SEALTREE_GPG_PATH"
_PUMP_READ_SIZE = 65536


# Anything accepting ciphertext chunks, e.g. a binary file or a BytesIO.
class ByteSink(Protocol):
    def write(self, data: bytes) -> int: ...


# Options shared by every invocation against a private home directory.
_BASE_OPTIONS = ("--batch", "--no-tty", "--quiet", "--no-greeting", "--no-permission-warning")


@dataclass
class GpgError(RuntimeError):
    cmd: Sequence[str]
    returncode: int
    stderr: str

    def __str__(self) -> str:
        detail = self.stderr.strip() or "unknown error"
        return f"gpg failed (exit {self.returncode}): {detail}"


def get_gpg_path(configured: str | None = None) -> str:
    env_path = os.environ.get(GPG_PATH_ENV)
    if env_path:
        return env_path
    if configured:
        return configured
    return shutil.which("gpg") or "gpg"


def gpg_command(gpg_path: str, homedir: str | Path, *args: str) -> list[str]:
    return [gpg_path, "--homedir", str(homedir), *_BASE_OPTIONS, *args]


def run_gpg(cmd: Sequence[str], data: bytes | None = None) -> subprocess.CompletedProcess[bytes]:
    try:
        proc = subprocess.run(
            list(cmd),
            input=data,
            stdin=None if data is not None else subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
    except OSError as exc:
        raise GpgError(cmd=list(cmd), returncode=-1, stderr=str(exc)) from exc
    if proc.returncode != 0:
        raise GpgError(
            cmd=list(cmd),
            returncode=proc.returncode,
            stderr=proc.stderr.decode("utf-8", errors="replace"),
        )
    return proc


@contextmanager
def temporary_homedir(gpg_path: str) -> Iterator[Path]:
    """Private GnuPG home directory, removed together with any agent it spawned."""
    with tempfile.TemporaryDirectory(prefix="sealtree-gpg-") as tmpdir:
        homedir = Path(tmpdir)
        os.chmod(homedir, 0o700)
        try:
            yield homedir
        finally:
            _kill_agents(gpg_path, homedir)


def _kill_agents(gpg_path: str, homedir: Path) -> None:
    if not any(homedir.glob("S.*")):
        return
    gpgconf = shutil.which("gpgconf", path=str(Path(gpg_path).parent)) or "gpgconf"
    try:
        subprocess.run(
            [gpgconf, "--homedir", str(homedir), "--kill", "all"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        pass


class GpgEncryptWriter:
    """Write plaintext into a running ``gpg --encrypt`` and pump ciphertext into ``sink``.

    ``close`` must be called to flush trailing ciphertext; only after it returns
    is the sink complete. ``abort`` kills the process and leaves the sink
    unusable.
    """

    def __init__(self, cmd: Sequence[str], sink: ByteSink) -> None:
        self._cmd = list(cmd)
        self._sink = sink
        self._stderr = tempfile.TemporaryFile()
        self._pump_error: BaseException | None = None
        self._stderr_text = ""
        self._stdin_broken = False
        self._closed = False
        try:
            self._proc = subprocess.Popen(
                self._cmd,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=self._stderr,
            )
        except OSError as exc:
            self._stderr.close()
            raise GpgError(cmd=self._cmd, returncode=-1, stderr=str(exc)) from exc
        self._pump = threading.Thread(target=self._drain_stdout, daemon=True)
        self._pump.start()

    def _drain_stdout(self) -> None:
        stdout = self._proc.stdout
        assert stdout is not None
        try:
            while True:
                chunk = stdout.read1(_PUMP_READ_SIZE)
                if not chunk:
                    break
                if self._pump_error is not None:
                    continue
                try:
                    self._sink.write(chunk)
                except Exception as exc:
                    # Keep reading so gpg never blocks on a full stdout pipe.
                    self._pump_error = exc
        except (OSError, ValueError) as exc:
            if self._pump_error is None:
                self._pump_error = exc

    def write(self, data: bytes) -> int:
        if self._closed:
            raise ValueError("write to closed encrypt writer")
        if self._pump_error is not None:
            self.abort()
            raise self._sink_error()
        stdin = self._proc.stdin
        assert stdin is not None
        try:
            stdin.write(data)
        except BrokenPipeError:
            # gpg exited early; report its own error instead of the pipe error.
            self._finish()
            raise self._error() from None
        return len(data)

    def close(self) -> None:
        if self._closed:
            return
        self._finish()
        if self._proc.returncode != 0 or self._stdin_broken:
            raise self._error()
        if self._pump_error is not None:
            raise self._sink_error()

    def abort(self) -> None:
        if self._closed:
            return
        if self._proc.poll() is None:
            self._proc.kill()
        self._finish()

    def _finish(self) -> None:
        self._closed = True
        stdin = self._proc.stdin
        assert stdin is not None
        try:
            stdin.close()
        except BrokenPipeError:
            self._stdin_broken = True
        self._pump.join()
        self._proc.wait()
        if self._proc.stdout is not None:
            self._proc.stdout.close()
        self._stderr.seek(0)
        self._stderr_text = self._stderr.read().decode("utf-8", errors="replace")
        self._stderr.close()

    def _error(self) -> GpgError:
        returncode = self._proc.returncode
        return GpgError(
            cmd=self._cmd,
            returncode=-1 if returncode is None else returncode,
            stderr=self._stderr_text or "gpg stopped reading input",
        )

    def _sink_error(self) -> GpgError:
        returncode = self._proc.returncode
        return GpgError(
            cmd=self._cmd,
            returncode=-1 if returncode is None else returncode,
            stderr=f"ciphertext sink failed: {self._pump_error}",
        )
