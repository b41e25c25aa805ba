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

import re
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from typer.testing import CliRunner

from sealtree.cli import app
from sealtree.config.installer import DEFAULT_CONFIG_PATH
from sealtree.core.errors import KeyLoadError

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]")


def _strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


class TestCliTyper(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()

    def test_root_info_commands(self) -> None:
        cases = (
            {
                "args": ["--help"],
                "expected_exit_code": 0,
                "contains": ("encrypt", "decrypt"),
            },
            {
                "args": ["--version"],
                "expected_exit_code": 0,
                "contains": ("sealtree",),
            },
        )
        for case in cases:
            with self.subTest(args=case["args"]):
                result = self.runner.invoke(app, case["args"])
                self.assertEqual(result.exit_code, case["expected_exit_code"])
                for expected in case["contains"]:
                    self.assertIn(expected, _strip_ansi(result.output).lower())

    def test_root_no_subcommand_references_help(self) -> None:
        result = self.runner.invoke(app, [])
        self.assertEqual(result.exit_code, 2)
        self.assertIn("sealtree --help", _strip_ansi(result.output))

    def test_encrypt_help_lists_options(self) -> None:
        result = self.runner.invoke(app, ["encrypt", "--help"])
        self.assertEqual(result.exit_code, 0)
        output = _strip_ansi(result.output)
        for option in ("--source", "--target", "--key", "--jobs", "--chunk-size"):
            self.assertIn(option, output)

    def test_encrypt_requires_two_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with mock.patch("sealtree.cli.flows.encrypt.run_batch") as run_batch:
                result = self.runner.invoke(
                    app,
                    [
                        "--config",
                        str(DEFAULT_CONFIG_PATH),
                        "encrypt",
                        "-s",
                        tmpdir,
                        "-t",
                        str(Path(tmpdir) / "out"),
                        "-k",
                        "alice.asc",
                    ],
                )
        self.assertEqual(result.exit_code, 2)
        self.assertIn("at least 2 public key files", _strip_ansi(result.output))
        run_batch.assert_not_called()

    def test_encrypt_missing_required_option(self) -> None:
        result = self.runner.invoke(app, ["encrypt", "-k", "a.asc", "-k", "b.asc"])
        self.assertEqual(result.exit_code, 2)
        self.assertIn("--source", _strip_ansi(result.output))

    def test_fatal_batch_error_exits_with_two(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with mock.patch(
                "sealtree.cli.flows.encrypt.run_batch",
                side_effect=KeyLoadError("bob.asc", "invalid key ring"),
            ):
                result = self.runner.invoke(
                    app,
                    [
                        "--config",
                        str(DEFAULT_CONFIG_PATH),
                        "encrypt",
                        "-s",
                        tmpdir,
                        "-t",
                        tmpdir,
                        "-k",
                        "alice.asc",
                        "-k",
                        "bob.asc",
                    ],
                )
        self.assertEqual(result.exit_code, 2)
        self.assertIn("invalid key ring", _strip_ansi(result.output))

    def test_missing_config_file_is_an_error(self) -> None:
        result = self.runner.invoke(
            app,
            [
                "--config",
                "/no/such/config.toml",
                "encrypt",
                "-s",
                ".",
                "-t",
                "out",
                "-k",
                "a.asc",
                "-k",
                "b.asc",
            ],
        )
        self.assertEqual(result.exit_code, 2)
        self.assertIn("config file not found", _strip_ansi(result.output))

    def test_decrypt_help_lists_options(self) -> None:
        result = self.runner.invoke(app, ["decrypt", "--help"])
        self.assertEqual(result.exit_code, 0)
        output = _strip_ansi(result.output)
        for option in ("--key", "--input", "--target", "--output-name", "--passphrase"):
            self.assertIn(option, output)


if __name__ == "__main__":
    unittest.main()
