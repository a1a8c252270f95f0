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

"""Three-way status of a local plugin version against Ore."""

from __future__ import annotations

from enum import Enum

from .keys import compare_any


class VersionStatus(Enum):
    """Status of a local version compared to the remote version."""

    OUT_OF_DATE = "Version is outdated"
    UP_TO_DATE = "Version is up to date"
    OVERDATED = "Local version is newer than remote version"

    def __str__(self) -> str:
        return self.value


def compare_versions(local: str, remote: str) -> VersionStatus:
    """Compare a local version against a remote version.

    Never raises: unparseable strings degrade to the minimal version key.

    Example:
        >>> compare_versions("1.0", "2.0")
        <VersionStatus.OUT_OF_DATE: 'Version is outdated'>
        >>> compare_versions("2.0.0PRE9H2", "2.0.0RC3")
        <VersionStatus.OVERDATED: 'Local version is newer than remote version'>
    """
    result = compare_any(local, remote)
    if result < 0:
        return VersionStatus.OUT_OF_DATE
    if result > 0:
        return VersionStatus.OVERDATED
    return VersionStatus.UP_TO_DATE
