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


import tempfile
import unittest
from pathlib import Path
from unittest import mock

from typer.testing import CliRunner

from sealtree.cli import app
from sealtree.cli.core.types import DecryptArgs, GlobalOptions
from sealtree.config.installer import CONFIG_FILENAME, XDG_CONFIG_ENV
from tests.test_support import temp_env

DECRYPT_ARGS = ["decrypt", "-k", "bob.asc", "-i", "a.pgp", "-t", "restore"]


class TestAppCallback(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()

    def test_init_config_writes_user_config_and_exits(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with temp_env({XDG_CONFIG_ENV: tmpdir}):
                result = self.runner.invoke(app, ["--init-config"])
            config_path = Path(tmpdir) / "sealtree" / CONFIG_FILENAME
            self.assertEqual(result.exit_code, 0, result.output)
            self.assertTrue(config_path.is_file())
        self.assertIn("User config ready at", result.output)

    def test_init_config_failure_exits_with_two(self) -> None:
        with mock.patch(
            "sealtree.cli.app.init_user_config",
            side_effect=OSError("unable to create config at /ro/sealtree"),
        ):
            result = self.runner.invoke(app, ["--init-config"])
        self.assertEqual(result.exit_code, 2)
        self.assertIn("unable to create config", result.output)

    def test_global_options_reach_the_command(self) -> None:
        with (
            mock.patch("sealtree.cli.app.configure_ui") as configure_ui,
            mock.patch("sealtree.cli.app.install_rich_traceback") as install_traceback,
            mock.patch("sealtree.cli.commands.decrypt.run_flow") as run_flow,
        ):
            result = self.runner.invoke(
                app,
                ["--quiet", "--debug", "--no-color", "--config", "team.toml", *DECRYPT_ARGS],
            )
        self.assertEqual(result.exit_code, 0, result.output)
        configure_ui.assert_called_once_with(no_color=True, no_animations=False)
        flow = run_flow.call_args.args[0]
        args: DecryptArgs = flow.args[0]
        self.assertEqual(args.config, "team.toml")
        self.assertTrue(args.quiet)
        self.assertTrue(run_flow.call_args.kwargs["debug"])
        install_traceback.assert_called_once_with(show_locals=True)

    def test_command_options_override_globals(self) -> None:
        with (
            mock.patch("sealtree.cli.app.configure_ui"),
            mock.patch("sealtree.cli.commands.decrypt.run_flow") as run_flow,
        ):
            result = self.runner.invoke(
                app,
                ["--config", "team.toml", *DECRYPT_ARGS, "--config", "mine.toml"],
            )
        self.assertEqual(result.exit_code, 0, result.output)
        args: DecryptArgs = run_flow.call_args.args[0].args[0]
        self.assertEqual(args.config, "mine.toml")
        self.assertFalse(args.quiet)

    def test_no_subcommand_names_the_commands(self) -> None:
        result = self.runner.invoke(app, [])
        self.assertEqual(result.exit_code, 2)
        self.assertIn("decrypt or encrypt", result.output)

    def test_global_options_defaults(self) -> None:
        self.assertEqual(GlobalOptions(), GlobalOptions(config=None, debug=False, quiet=False))


if __name__ == "__main__":
    unittest.main()
