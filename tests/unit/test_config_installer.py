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
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from sealtree.config import installer


class TestConfigInstaller(unittest.TestCase):
    def test_user_config_dir_precedence(self) -> None:
        with mock.patch.dict(
            os.environ,
            {installer.XDG_CONFIG_ENV: "/tmp/xdg"},
            clear=False,
        ):
            with mock.patch.object(installer.sys, "platform", "linux"):
                self.assertEqual(installer._user_config_dir(), Path("/tmp/xdg/sealtree"))

        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop(installer.XDG_CONFIG_ENV, None)
            with mock.patch.object(installer.sys, "platform", "darwin"):
                with mock.patch.object(installer.Path, "home", return_value=Path("/Users/example")):
                    self.assertEqual(
                        installer._user_config_dir(),
                        Path("/Users/example/.config/sealtree"),
                    )

        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop(installer.XDG_CONFIG_ENV, None)
            with mock.patch.object(installer.sys, "platform", "linux"):
                with mock.patch.object(
                    installer, "user_config_dir", return_value="/opt/config/sealtree"
                ):
                    self.assertEqual(installer._user_config_dir(), Path("/opt/config/sealtree"))

    def test_resolve_config_path_precedence(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            explicit = root / "custom.toml"
            explicit.write_text("", encoding="utf-8")
            self.assertEqual(installer.resolve_config_path(explicit), explicit)
            with self.assertRaisesRegex(ValueError, "config file not found"):
                installer.resolve_config_path(root / "missing.toml")

            user_path = root / "user" / "config.toml"
            with mock.patch.object(installer, "user_config_path", return_value=user_path):
                self.assertEqual(installer.resolve_config_path(), installer.DEFAULT_CONFIG_PATH)
                user_path.parent.mkdir()
                user_path.write_text("", encoding="utf-8")
                self.assertEqual(installer.resolve_config_path(), user_path)

    def test_init_user_config_copies_once(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with mock.patch.dict(os.environ, {installer.XDG_CONFIG_ENV: tmpdir}, clear=False):
                dest = installer.init_user_config()
                self.assertEqual(dest, Path(tmpdir) / "sealtree" / "config.toml")
                self.assertEqual(
                    dest.read_text(encoding="utf-8"),
                    installer.DEFAULT_CONFIG_PATH.read_text(encoding="utf-8"),
                )
                dest.write_text("# customized\n", encoding="utf-8")
                installer.init_user_config()
                self.assertEqual(dest.read_text(encoding="utf-8"), "# customized\n")

    def test_init_user_config_failure(self) -> None:
        with mock.patch.object(installer, "_copy_if_missing", side_effect=OSError("denied")):
            with self.assertRaisesRegex(OSError, "unable to create config"):
                installer.init_user_config()


if __name__ == "__main__":
    unittest.main()
