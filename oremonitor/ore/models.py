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

"""Typed views of Ore v2 API responses.

Every model is a frozen dataclass built with ``from_dict``. Parsing is
lenient: missing or mistyped fields fall back to empty defaults so that
a schema change on Ore degrades output instead of breaking the CLI.

Example:
    ```python
    project = Project.from_dict(response.json())
    print(project.namespace.owner, project.namespace.slug)
    print(project.version_from_tag(7))
    ```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from oremonitor.versioning.remote import version_from_tag


def _str(data: dict[str, Any], key: str, default: str = "") -> str:
    value = data.get(key)
    return value if isinstance(value, str) else default


def _opt_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    return value if isinstance(value, str) else None


def _int(data: dict[str, Any], key: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return int(value)


def _dict(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _dicts(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    value = data.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def parse_datetime(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp as returned by Ore ("...Z" allowed)."""
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


class Category(Enum):
    """Ore project categories (API value -> display name)."""

    ADMIN_TOOLS = "admin_tools"
    CHAT = "chat"
    DEV_TOOLS = "dev_tools"
    ECONOMY = "economy"
    GAMEPLAY = "gameplay"
    GAMES = "games"
    PROTECTION = "protection"
    ROLE_PLAYING = "role_playing"
    WORLD_MANAGEMENT = "world_management"
    MISC = "misc"


class ProjectSort(Enum):
    """Sorting strategies accepted by the project search endpoint."""

    STARS = "stars"
    DOWNLOADS = "downloads"
    VIEWS = "views"
    NEWEST = "newest"
    UPDATED = "updated"
    ONLY_RELEVANCE = "only_relevance"
    RECENT_DOWNLOADS = "recent_downloads"
    RECENT_VIEWS = "recent_views"


@dataclass(frozen=True)
class VersionTagColor:
    foreground: str = ""
    background: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VersionTagColor:
        return cls(foreground=_str(data, "foreground"), background=_str(data, "background"))


@dataclass(frozen=True)
class PromotedVersionTag:
    """Tag attached to a promoted version, e.g. name="Sponge", display_data="7.3"."""

    name: str
    data: str | None = None
    display_data: str | None = None
    minecraft_version: str | None = None
    color: VersionTagColor = field(default_factory=VersionTagColor)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PromotedVersionTag:
        return cls(
            name=_str(data, "name"),
            data=_opt_str(data, "data"),
            display_data=_opt_str(data, "display_data"),
            minecraft_version=_opt_str(data, "minecraft_version"),
            color=VersionTagColor.from_dict(_dict(data, "color")),
        )

    def __str__(self) -> str:
        return f"{self.name} {self.display_data or ''}".rstrip()


@dataclass(frozen=True)
class PromotedVersion:
    """A published build flagged as recommended on a project page."""

    version: str
    tags: tuple[PromotedVersionTag, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PromotedVersion:
        return cls(
            version=_str(data, "version"),
            tags=tuple(PromotedVersionTag.from_dict(t) for t in _dicts(data, "tags")),
        )


@dataclass(frozen=True)
class ProjectNamespace:
    owner: str = ""
    slug: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProjectNamespace:
        return cls(owner=_str(data, "owner"), slug=_str(data, "slug"))


@dataclass(frozen=True)
class ProjectStats:
    views: int = 0
    downloads: int = 0
    recent_views: int = 0
    recent_downloads: int = 0
    stars: int = 0
    watchers: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProjectStats:
        return cls(
            views=_int(data, "views"),
            downloads=_int(data, "downloads"),
            recent_views=_int(data, "recent_views"),
            recent_downloads=_int(data, "recent_downloads"),
            stars=_int(data, "stars"),
            watchers=_int(data, "watchers"),
        )


@dataclass(frozen=True)
class ProjectSettings:
    homepage: str | None = None
    issues: str | None = None
    sources: str | None = None
    license_name: str | None = None
    license_url: str | None = None
    forum_sync: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProjectSettings:
        license_data = _dict(data, "license")
        return cls(
            homepage=_opt_str(data, "homepage"),
            issues=_opt_str(data, "issues"),
            sources=_opt_str(data, "sources"),
            license_name=_opt_str(license_data, "name"),
            license_url=_opt_str(license_data, "url"),
            forum_sync=bool(data.get("forum_sync", False)),
        )


@dataclass(frozen=True)
class Project:
    """An Ore project (plugin) as returned by ``GET /projects/{plugin_id}``."""

    plugin_id: str
    name: str
    namespace: ProjectNamespace
    promoted_versions: tuple[PromotedVersion, ...] = ()
    stats: ProjectStats = field(default_factory=ProjectStats)
    category: str = ""
    description: str = ""
    created_at: datetime | None = None
    last_updated: datetime | None = None
    visibility: str = ""
    icon_url: str = ""
    settings: ProjectSettings = field(default_factory=ProjectSettings)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Project:
        return cls(
            plugin_id=_str(data, "plugin_id"),
            name=_str(data, "name"),
            namespace=ProjectNamespace.from_dict(_dict(data, "namespace")),
            promoted_versions=tuple(
                PromotedVersion.from_dict(p) for p in _dicts(data, "promoted_versions")
            ),
            stats=ProjectStats.from_dict(_dict(data, "stats")),
            category=_str(data, "category"),
            description=_str(data, "description"),
            created_at=parse_datetime(data.get("created_at")),
            last_updated=parse_datetime(data.get("last_updated")),
            visibility=_str(data, "visibility"),
            icon_url=_str(data, "icon_url"),
            settings=ProjectSettings.from_dict(_dict(data, "settings")),
        )

    def version_from_tag(self, major: int) -> str:
        """Label of the promoted version for platform API ``major`` ("" if none)."""
        return version_from_tag(self.promoted_versions, major)


@dataclass(frozen=True)
class Pagination:
    limit: int = 0
    offset: int = 0
    count: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Pagination:
        return cls(
            limit=_int(data, "limit"),
            offset=_int(data, "offset"),
            count=_int(data, "count"),
        )


@dataclass(frozen=True)
class PaginatedProjects:
    pagination: Pagination
    result: tuple[Project, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PaginatedProjects:
        return cls(
            pagination=Pagination.from_dict(_dict(data, "pagination")),
            result=tuple(Project.from_dict(p) for p in _dicts(data, "result")),
        )


@dataclass(frozen=True)
class VersionDependency:
    plugin_id: str
    version: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VersionDependency:
        return cls(plugin_id=_str(data, "plugin_id"), version=_opt_str(data, "version"))

    def __str__(self) -> str:
        return f"[{self.plugin_id}:{self.version or ''}]"


@dataclass(frozen=True)
class VersionTag:
    name: str
    data: str | None = None
    color: VersionTagColor = field(default_factory=VersionTagColor)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VersionTag:
        return cls(
            name=_str(data, "name"),
            data=_opt_str(data, "data"),
            color=VersionTagColor.from_dict(_dict(data, "color")),
        )

    def __str__(self) -> str:
        return f"{self.name}:{self.data or ''}"


@dataclass(frozen=True)
class FileInfo:
    name: str = ""
    size_bytes: float = 0.0
    md5_hash: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileInfo:
        size = data.get("size_bytes")
        return cls(
            name=_str(data, "name"),
            size_bytes=float(size) if isinstance(size, (int, float)) else 0.0,
            md5_hash=_opt_str(data, "md_5_hash") or _opt_str(data, "md5_hash"),
        )


@dataclass(frozen=True)
class Version:
    """One uploaded version of a project."""

    name: str
    created_at: datetime | None = None
    dependencies: tuple[VersionDependency, ...] = ()
    visibility: str = ""
    description: str | None = None
    downloads: int = 0
    file_info: FileInfo = field(default_factory=FileInfo)
    author: str | None = None
    review_state: str = ""
    tags: tuple[VersionTag, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Version:
        return cls(
            name=_str(data, "name"),
            created_at=parse_datetime(data.get("created_at")),
            dependencies=tuple(
                VersionDependency.from_dict(d) for d in _dicts(data, "dependencies")
            ),
            visibility=_str(data, "visibility"),
            description=_opt_str(data, "description"),
            downloads=_int(_dict(data, "stats"), "downloads"),
            file_info=FileInfo.from_dict(_dict(data, "file_info")),
            author=_opt_str(data, "author"),
            review_state=_str(data, "review_state"),
            tags=tuple(VersionTag.from_dict(t) for t in _dicts(data, "tags")),
        )


@dataclass(frozen=True)
class PaginatedVersions:
    pagination: Pagination
    result: tuple[Version, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PaginatedVersions:
        return cls(
            pagination=Pagination.from_dict(_dict(data, "pagination")),
            result=tuple(Version.from_dict(v) for v in _dicts(data, "result")),
        )


@dataclass(frozen=True)
class OreSession:
    """An Ore API session token and its expiry."""

    session: str
    expires: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OreSession:
        return cls(session=_str(data, "session"), expires=parse_datetime(data.get("expires")))

    def header_value(self) -> str:
        return f"OreApi session={self.session}"
