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

"""Ore v2 API access for Ore Monitor.

Public API:

- OreAuth: Obtain a session token
- OreClient: Authenticated API client (search, projects, versions)
- Project, PromotedVersion, Version, ...: Response models
"""

from .auth import OreAuth
from .client import DEFAULT_API_URL, DEFAULT_SITE_URL, OreClient, build_query
from .models import (
    Category,
    FileInfo,
    OreSession,
    Pagination,
    PaginatedProjects,
    PaginatedVersions,
    Project,
    ProjectNamespace,
    ProjectSort,
    ProjectStats,
    PromotedVersion,
    PromotedVersionTag,
    Version,
    VersionTag,
)

__all__ = [
    "Category",
    "DEFAULT_API_URL",
    "DEFAULT_SITE_URL",
    "FileInfo",
    "OreAuth",
    "OreClient",
    "OreSession",
    "Pagination",
    "PaginatedProjects",
    "PaginatedVersions",
    "Project",
    "ProjectNamespace",
    "ProjectSort",
    "ProjectStats",
    "PromotedVersion",
    "PromotedVersionTag",
    "Version",
    "VersionTag",
    "build_query",
]
