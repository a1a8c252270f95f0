# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Read-only view of a plugin archive (.jar/.zip).

The extractor only needs one capability from an archive: read a named
entry as UTF-8 text, or fail with EntryNotFoundError. ArchiveReader
provides that on top of zipfile and maps every I/O failure to ArchiveError.

Example:
    Read the legacy metadata file from a jar:
        ```python
        from pathlib import Path
        from oremonitor.archive.reader import ArchiveReader

        with ArchiveReader.open(Path("mods/nucleus.jar")) as reader:
            text = reader.read_text("mcmod.info")
        ```
"""

from __future__ import annotations

from pathlib import Path
import zipfile
import zlib

from oremonitor.exceptions import ArchiveError, EntryNotFoundError


class ArchiveReader:
    """Named-entry access to an open zip archive."""

    def __init__(self, archive: zipfile.ZipFile, path: Path) -> None:
        self._archive = archive
        self.path = path

    @classmethod
    def open(cls, path: Path) -> ArchiveReader:
        """Open ``path`` as a zip archive.

        Raises:
            ArchiveError: If the file does not exist, is a directory, or is
                not a valid zip archive.
        """
        path = Path(path)
        try:
            archive = zipfile.ZipFile(path, "r")
        except FileNotFoundError as err:
            raise ArchiveError(f"Archive not found: {path}") from err
        except zipfile.BadZipFile as err:
            raise ArchiveError(f"Not a valid jar/zip archive: {path}") from err
        except OSError as err:
            raise ArchiveError(f"Cannot open archive {path}: {err}") from err
        return cls(archive, path)

    def read_text(self, name: str) -> str:
        """Return the entry ``name`` decoded as UTF-8.

        Raises:
            EntryNotFoundError: If the archive has no entry with that name.
            ArchiveError: If the entry is corrupt or not valid UTF-8.
        """
        try:
            data = self._archive.read(name)
        except KeyError as err:
            raise EntryNotFoundError(f"{name} not found in {self.path.name}") from err
        except (zipfile.BadZipFile, zlib.error, OSError) as err:
            raise ArchiveError(
                f"Cannot read {name} from {self.path.name}: {err}"
            ) from err
        except (RuntimeError, NotImplementedError) as err:
            # Encrypted entries and compression methods zipfile cannot inflate.
            raise ArchiveError(
                f"Unsupported entry {name} in {self.path.name}: {err}"
            ) from err
        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError as err:
            raise ArchiveError(
                f"{name} in {self.path.name} is not valid UTF-8"
            ) from err

    def close(self) -> None:
        self._archive.close()

    def __enter__(self) -> ArchiveReader:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
