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

"""Core orchestration for Ore Monitor.

This module coordinates the two workflows that touch both the local disk
and Ore:

- **check**: read plugin metadata from local archives, look up each
  plugin's promoted versions on Ore, and compare the local version with
  the promoted version built for the same platform API major version.
- **install**: download a given plugin version into a folder.

Design Principles:

- Functions return structured data (dataclasses) for easy testing
- Error handling uses exceptions; the CLI layer formats for display
- The Ore client is passed in, so tests can substitute a fake

Example:
    Programmatic usage:
        ```python
        from pathlib import Path
        from oremonitor.config import load_effective_config
        from oremonitor.core import check_versions
        from oremonitor.ore import OreClient

        client = OreClient.from_config(load_effective_config())
        for result in check_versions(client, Path("./mods")):
            print(f"{result.mod_id}: {result.status_text}")
        ```
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from oremonitor.archive import LocalModRecord, extract_archive, extract_directory
from oremonitor.exceptions import NetworkError, PlatformVersionError
from oremonitor.io import download_file
from oremonitor.logging import get_global_logger
from oremonitor.ore.models import Project
from oremonitor.results import InstallResult, VersionComparisonResult
from oremonitor.versioning import NO_MATCH, PLATFORM_ID, compare_versions

if TYPE_CHECKING:
    from oremonitor.ore import OreClient


def load_local_records(path: Path, platform_id: str = PLATFORM_ID) -> list[LocalModRecord]:
    """Read plugin records from a directory or a single archive.

    Directory mode skips unreadable entries. Single-file mode propagates
    ArchiveError/MetadataError. Any other path yields no records.
    """
    path = Path(path)
    if path.is_dir():
        return extract_directory(path, platform_id)
    if path.is_file():
        return [extract_archive(path, platform_id)]
    get_global_logger().verbose("CHECK", f"Nothing to check at {path}")
    return []


def compare_record(record: LocalModRecord, project: Project) -> VersionComparisonResult:
    """Compare one local record with its Ore project."""
    logger = get_global_logger()
    try:
        major = record.platform_major()
    except PlatformVersionError as err:
        logger.verbose("CHECK", str(err))
        return VersionComparisonResult(
            mod_id=record.mod_id,
            local_version=record.version,
            remote_version=NO_MATCH,
            status=None,
            archive_path=record.archive_path,
            error=str(err),
        )

    remote = project.version_from_tag(major)
    if remote == NO_MATCH:
        logger.verbose(
            "CHECK", f"{record.mod_id}: no promoted version for API {major}"
        )
        return VersionComparisonResult(
            mod_id=record.mod_id,
            local_version=record.version,
            remote_version=NO_MATCH,
            status=None,
            major_api_version=major,
            archive_path=record.archive_path,
            error=f"No promoted version found for platform API {major}",
        )

    status = compare_versions(record.version, remote)
    logger.debug("CHECK", f"{record.mod_id}: {record.version} vs {remote} -> {status.name}")
    return VersionComparisonResult(
        mod_id=record.mod_id,
        local_version=record.version,
        remote_version=remote,
        status=status,
        major_api_version=major,
        archive_path=record.archive_path,
    )


def check_versions(
    client: OreClient, path: Path, platform_id: str = PLATFORM_ID
) -> list[VersionComparisonResult]:
    """Compare every local plugin under path with its promoted Ore version.

    Args:
        client: Authenticated Ore client.
        path: Plugin directory or a single archive.
        platform_id: Platform dependency id used to resolve API versions.

    Returns:
        One result per local record with a plugin id, in record order. A
        record whose Ore lookup fails gets a result with ``error`` set.

    Raises:
        ArchiveError, MetadataError: Single-file mode only.
    """
    logger = get_global_logger()
    logger.step(1, 2, "Reading plugin metadata...")
    records = load_local_records(path, platform_id)
    logger.verbose("CHECK", f"Found {len(records)} plugin(s)")
    if not records:
        return []

    logger.step(2, 2, f"Checking {len(records)} plugin(s) on Ore...")
    results = []
    for record in records:
        if not record.mod_id:
            logger.verbose("CHECK", f"Skipping {record.archive_path}: no plugin id")
            continue
        try:
            project = client.get_project(record.mod_id)
        except NetworkError as err:
            logger.verbose("CHECK", f"{record.mod_id}: lookup failed: {err}")
            results.append(
                VersionComparisonResult(
                    mod_id=record.mod_id,
                    local_version=record.version,
                    remote_version=NO_MATCH,
                    status=None,
                    archive_path=record.archive_path,
                    error=str(err),
                )
            )
            continue
        results.append(compare_record(record, project))
    return results


def install_plugin(
    client: OreClient, plugin_id: str, version: str, directory: Path
) -> InstallResult:
    """Download one version of a plugin into directory.

    Args:
        client: Authenticated Ore client.
        plugin_id: Ore plugin id, e.g. "nucleus".
        version: Version name as listed on Ore.
        directory: Destination folder (created if missing).

    Returns:
        InstallResult with the written path and its MD5.

    Raises:
        NetworkError: Unknown project or version, transport failure, or a
            file whose MD5 differs from the one Ore publishes.
    """
    logger = get_global_logger()
    logger.step(1, 2, f"Resolving {plugin_id} {version}...")
    project = client.get_project(plugin_id)
    expected_md5 = client.get_version(plugin_id, version).file_info.md5_hash
    url = client.download_url(project, version)

    logger.step(2, 2, "Downloading plugin...")
    logger.verbose("INSTALL", f"Downloading {plugin_id} {version} from {url}")

    file_path, md5, _headers = download_file(
        url,
        Path(directory),
        session=client.http,
        headers={"Authorization": client.session.header_value()},
        expected_md5=expected_md5,
        timeout=client.timeout,
    )
    logger.verbose("INSTALL", f"Saved {file_path}")
    return InstallResult(
        plugin_id=plugin_id,
        version=version,
        file_path=file_path,
        md5=md5,
        status="success",
    )
