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

import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from sealtree.core.errors import ErrorKind, KeyLoadError
from sealtree.crypto.gpg import GpgError
from sealtree.crypto.keyring import (
    listing_record_types,
    load_recipients,
    parse_colon_listing,
    parse_import_status,
)

IMPORT_STATUS = """\
[GNUPG:] KEY_CONSIDERED 0123456789ABCDEF0123456789ABCDEF01234567 0
[GNUPG:] IMPORTED 89ABCDEF01234567 Alice <alice@example.com>
[GNUPG:] IMPORT_OK 1 0123456789abcdef0123456789abcdef01234567
[GNUPG:] IMPORT_OK 0 FEDCBA9876543210FEDCBA9876543210FEDCBA98
[GNUPG:] IMPORT_RES 2 0 1 0 1 0 0 0 0 0 0 0 0 0 0
"""

COLON_LISTING = """\
tru::1:1700000000:0:3:1:5
pub:-:255:22:89ABCDEF01234567:1700000000:::-:::scESC::::::ed25519:::0:
fpr:::::::::0123456789ABCDEF0123456789ABCDEF01234567:
uid:-::::1700000000::HASH1::Alice <alice@example.com>::::::::::0:
uid:-::::1700000000::HASH2::Alice \\x3a Work <alice@work.example>::::::::::0:
sub:-:255:18:1111222233334444:1700000000::::::e::::::cv25519::
fpr:::::::::AAAABBBBCCCCDDDDEEEEFFFF1111222233334444:
pub:-:3072:1:FEDCBA9876543210:1700000000:::-:::scESC::::::::0:
fpr:::::::::fedcba9876543210fedcba9876543210fedcba98:
"""

SECRET_LISTING = """\
sec:u:255:22:89ABCDEF01234567:1700000000:::u:::scESC:::+:::ed25519:::0:
fpr:::::::::0123456789ABCDEF0123456789ABCDEF01234567:
uid:u::::1700000000::HASH1::Alice <alice@example.com>::::::::::0:
ssb:u:255:18:1111222233334444:1700000000::::::e:::+:::cv25519::
"""


class TestParsers(unittest.TestCase):
    def test_import_status_collects_fingerprints(self) -> None:
        self.assertEqual(
            parse_import_status(IMPORT_STATUS),
            [
                "0123456789ABCDEF0123456789ABCDEF01234567",
                "FEDCBA9876543210FEDCBA9876543210FEDCBA98",
            ],
        )
        self.assertEqual(parse_import_status("gpg: no valid OpenPGP data found.\n"), [])

    def test_colon_listing_maps_primary_fingerprints_to_user_ids(self) -> None:
        listing = parse_colon_listing(COLON_LISTING)
        self.assertEqual(
            listing,
            {
                "0123456789ABCDEF0123456789ABCDEF01234567": [
                    "Alice <alice@example.com>",
                    "Alice : Work <alice@work.example>",
                ],
                "FEDCBA9876543210FEDCBA9876543210FEDCBA98": [],
            },
        )

    def test_listing_record_types(self) -> None:
        self.assertEqual(listing_record_types(COLON_LISTING), {"tru", "pub", "fpr", "uid", "sub"})
        self.assertEqual(listing_record_types(SECRET_LISTING), {"sec", "fpr", "uid", "ssb"})
        self.assertEqual(listing_record_types(""), set())


class TestLoadRecipientsErrors(unittest.TestCase):
    def _assert_key_load_error(self, key_paths: list[Path], message: str) -> None:
        with self.assertRaises(KeyLoadError) as ctx:
            with load_recipients(key_paths, gpg_path="gpg"):
                self.fail("load_recipients should not yield")
        self.assertEqual(ctx.exception.kind, ErrorKind.KEY_LOAD_FAILURE)
        self.assertIn(message, str(ctx.exception))

    def test_no_key_files(self) -> None:
        self._assert_key_load_error([], "at least one public key file")

    def test_unreadable_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            self._assert_key_load_error([Path(tmpdir) / "missing.asc"], "unable to read key file")

    def test_rejected_key_material(self) -> None:
        rejected = GpgError(cmd=["gpg"], returncode=2, stderr="gpg: no valid OpenPGP data found.")
        cases = (
            ("garbage.asc", rejected, "invalid key ring"),
            ("secret.asc", _listing(SECRET_LISTING), "expected a public key"),
            ("empty.asc", _listing(""), "no public key found"),
        )
        for name, listing, message in cases:
            with self.subTest(name=name):
                with tempfile.TemporaryDirectory() as tmpdir:
                    path = Path(tmpdir) / name
                    path.write_bytes(b"key material")
                    with mock.patch(
                        "sealtree.crypto.keyring.run_gpg", side_effect=[listing]
                    ) as run_gpg:
                        self._assert_key_load_error([path], message)
                run_gpg.assert_called_once()
                cmd, data = run_gpg.call_args.args
                self.assertIn("--show-keys", cmd)
                self.assertEqual(data, b"key material")


def _listing(text: str) -> subprocess.CompletedProcess[bytes]:
    return subprocess.CompletedProcess(["gpg"], 0, text.encode("utf-8"), b"")


if __name__ == "__main__":
    unittest.main()
