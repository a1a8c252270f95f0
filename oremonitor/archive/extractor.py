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

"""Extract plugin metadata from local archives.

Metadata strategies are tried in a fixed order and the first one that
both finds its file and parses it wins:

1. legacy  - ``mcmod.info`` at the archive root
2. modern  - ``META-INF/sponge_plugins.json``

If neither succeeds the archive raises MetadataError. In directory mode
every entry is tried independently and failing entries are dropped, so a
plugins folder with stray config files or broken jars still yields the
plugins that can be read.

Example:
    Single archive:
        ```python
        from pathlib import Path
        from oremonitor.archive import extract_archive

        record = extract_archive(Path("mods/nucleus.jar"))
        print(record.mod_id, record.version, record.major_api_version)
        ```

    Whole directory:
        ```python
        from oremonitor.archive import extract_directory

        for record in extract_directory(Path("mods")):
            print(record.mod_id)
        ```
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from pathlib import Path

from oremonitor.exceptions import ArchiveError, MetadataError
from oremonitor.logging import get_global_logger
from oremonitor.versioning.platform import PLATFORM_ID

from .reader import ArchiveReader
from .schemas import LocalModRecord, parse_legacy, parse_modern

LEGACY_METADATA_PATH = "mcmod.info"
MODERN_METADATA_PATH = "META-INF/sponge_plugins.json"


@dataclass(frozen=True)
class MetadataStrategy:
    """A metadata file location paired with its parser."""

    name: str
    entry: str
    parse: Callable[[str, str], LocalModRecord]


STRATEGIES: tuple[MetadataStrategy, ...] = (
    MetadataStrategy("legacy", LEGACY_METADATA_PATH, parse_legacy),
    MetadataStrategy("modern", MODERN_METADATA_PATH, parse_modern),
)


def extract_from_reader(
    reader: ArchiveReader, platform_id: str = PLATFORM_ID
) -> LocalModRecord:
    """Run the metadata strategies against an open archive.

    Raises:
        MetadataError: If no strategy finds and parses its metadata file.
    """
    logger = get_global_logger()
    failures: list[str] = []

    for strategy in STRATEGIES:
        try:
            text = reader.read_text(strategy.entry)
            record = strategy.parse(text, platform_id)
        except (ArchiveError, MetadataError) as err:
            logger.debug("ARCHIVE", f"{reader.path.name}: {strategy.name} failed: {err}")
            failures.append(f"{strategy.name}: {err}")
            continue
        logger.debug("ARCHIVE", f"{reader.path.name}: read {strategy.entry}")
        return record

    raise MetadataError(
        f"No recognized metadata in {reader.path.name} ({'; '.join(failures)})"
    )


def extract_archive(path: Path, platform_id: str = PLATFORM_ID) -> LocalModRecord:
    """Extract a LocalModRecord from a single jar/zip file.

    Args:
        path: Path to the archive.
        platform_id: Platform dependency id used to resolve the API version.

    Returns:
        The normalized record, with ``archive_path`` set.

    Raises:
        ArchiveError: If the file cannot be opened as an archive.
        MetadataError: If it contains no recognized metadata.
    """
    path = Path(path)
    with ArchiveReader.open(path) as reader:
        record = extract_from_reader(reader, platform_id)
    get_global_logger().verbose(
        "ARCHIVE", f"{path.name}: {record.mod_id} {record.version} ({record.schema})"
    )
    return replace(record, archive_path=path)


def extract_directory(
    directory: Path, platform_id: str = PLATFORM_ID
) -> list[LocalModRecord]:
    """Extract records from every archive in a directory.

    Entries are visited in name order. Entries that are not readable
    archives or carry no recognized metadata are skipped.

    Raises:
        ArchiveError: If the directory itself cannot be listed.
    """
    directory = Path(directory)
    logger = get_global_logger()
    try:
        entries = sorted(directory.iterdir())
    except OSError as err:
        raise ArchiveError(f"Cannot list directory {directory}: {err}") from err

    records: list[LocalModRecord] = []
    for entry in entries:
        try:
            records.append(extract_archive(entry, platform_id))
        except (ArchiveError, MetadataError) as err:
            logger.verbose("ARCHIVE", f"Skipping {entry.name}: {err}")
    return records
