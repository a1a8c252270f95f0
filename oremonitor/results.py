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

"""Public API return types for Ore Monitor.

All dataclasses are frozen (immutable) to prevent accidental mutation of
return values.

Example:
    Using result types:
        ```python
        from pathlib import Path
        from oremonitor.core import check_versions

        for result in check_versions(client, Path("./mods")):
            print(result.mod_id, result.status)
        ```

Note:
    Only public API return types belong in this module. Domain types
    (like LocalModRecord or Project) stay next to their related logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from oremonitor.versioning.status import VersionStatus


@dataclass(frozen=True)
class VersionComparisonResult:
    """Outcome of comparing one local plugin with its Ore project.

    Attributes:
        mod_id: Plugin id read from the archive.
        local_version: Version read from the archive.
        remote_version: Promoted version for the same platform major, or ""
            when the project promotes none.
        status: Comparison status, or None when there was nothing to compare
            (no remote match, or the platform version is unknown).
        major_api_version: Platform API major version, if resolved.
        archive_path: Archive the local record was read from.
        error: Why status is None, when it is.
    """

    mod_id: str
    local_version: str
    remote_version: str
    status: VersionStatus | None
    major_api_version: int | None = None
    archive_path: Path | None = None
    error: str | None = None

    @property
    def status_text(self) -> str:
        return str(self.status) if self.status is not None else "unknown"


@dataclass(frozen=True)
class InstallResult:
    """Result from downloading a plugin version.

    Attributes:
        plugin_id: Ore plugin id.
        version: Version name that was requested.
        file_path: Where the file was written.
        md5: MD5 of the written file.
        status: Always "success" for a completed install.
    """

    plugin_id: str
    version: str
    file_path: Path
    md5: str
    status: str
