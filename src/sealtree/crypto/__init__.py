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

from .decrypt import DEFAULT_OUTPUT_NAME, decrypt_file
from .engine import DEFAULT_CHUNK_SIZE, encrypt_file, encrypt_stream
from .gpg import GpgError, get_gpg_path
from .keyring import Recipient, RecipientSet, load_recipients

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_OUTPUT_NAME",
    "GpgError",
    "Recipient",
    "RecipientSet",
    "decrypt_file",
    "encrypt_file",
    "encrypt_stream",
    "get_gpg_path",
    "load_recipients",
]
