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

"""Exception hierarchy for Ore Monitor.

This module defines a custom exception hierarchy that allows library users
to distinguish between different types of errors:

- ConfigError: Configuration-related errors (YAML parse, invalid values)
- NetworkError: Ore API and download errors (HTTP status, invalid JSON)
- ArchiveError: Archive I/O errors (missing file, corrupt jar/zip, missing entry)
- MetadataError: No recognized plugin metadata inside an archive
- PlatformVersionError: The platform API version of a plugin cannot be determined

All exceptions inherit from OreMonitorError, allowing users to catch every
Ore Monitor error with a single except clause if needed.

Example:
    Catching specific error types:
        ```python
        from oremonitor.archive import extract_archive
        from oremonitor.exceptions import ArchiveError, MetadataError

        try:
            record = extract_archive(Path("mods/nucleus.jar"))
        except ArchiveError as e:
            print(f"Cannot read archive: {e}")
        except MetadataError as e:
            print(f"Not a Sponge plugin: {e}")
        ```

    Catching all Ore Monitor errors:
        ```python
        from oremonitor.exceptions import OreMonitorError

        try:
            results = check_versions(client, Path("mods"))
        except OreMonitorError as e:
            print(f"Error: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "OreMonitorError",
    "ConfigError",
    "NetworkError",
    "ArchiveError",
    "EntryNotFoundError",
    "MetadataError",
    "PlatformVersionError",
]


class OreMonitorError(Exception):
    """Base exception for all Ore Monitor errors.

    All Ore Monitor exceptions inherit from this class, allowing users
    to catch all of them with a single except clause if needed.
    """

    pass


class ConfigError(OreMonitorError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - YAML parsing (syntax errors, non-mapping documents)
    - Invalid configuration values (e.g., a non-positive timeout)
    - A config file passed explicitly that does not exist
    """

    pass


class NetworkError(OreMonitorError):
    """Raised for Ore API and download errors.

    This exception is raised when there are problems with:

    - Connection failures and timeouts
    - Non-successful HTTP status codes from the Ore API
    - Responses that are not valid JSON
    - Plugin downloads that fail or do not match their published checksum
    """

    pass


class ArchiveError(OreMonitorError):
    """Raised when a plugin archive cannot be opened or read.

    This covers missing files, files that are not zip archives, and
    corrupt archive entries. In directory mode these errors are recovered
    per archive and the archive is skipped.
    """

    pass


class EntryNotFoundError(ArchiveError):
    """Raised when a named entry is not present inside an archive."""

    pass


class MetadataError(OreMonitorError):
    """Raised when an archive contains no recognized plugin metadata.

    Neither the legacy ``mcmod.info`` nor the modern
    ``META-INF/sponge_plugins.json`` file could be found and parsed.
    """

    pass


class PlatformVersionError(OreMonitorError):
    """Raised when a plugin's platform API major version cannot be determined.

    The legacy metadata exposes two dependency lists; when neither contains
    a parseable ``spongeapi@<major>.<minor>`` entry, there is no way to pick
    the matching promoted version on Ore.

    Example:
        Handling an unknown platform version:
            ```python
            from oremonitor.exceptions import PlatformVersionError

            try:
                major = record.platform_major()
            except PlatformVersionError as e:
                print(f"Cannot determine platform compatibility: {e}")
            ```
    """

    pass
