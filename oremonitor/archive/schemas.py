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

"""Plugin metadata schemas and the normalized LocalModRecord.

Two on-disk formats declare a plugin's identity and dependencies:

Legacy (``mcmod.info``, API 7 and older):
    {"info": {"modid": "nucleus", "name": "Nucleus", "version": "2.1.4",
              "dependencies": ["spongeapi@7.3"],
              "requiredMods": ["spongeapi@7.3"]}}

    The common list form ``[{...}]`` and ``{"modList": [{...}]}`` are
    accepted too; the first entry is used.

Modern (``META-INF/sponge_plugins.json``, API 8 and newer):
    {"global": {"version": "1.0.0",
                "dependencies": [{"id": "spongeapi", "version": "8.0.0"}]},
     "plugins": [{"id": "myplugin", "name": "My Plugin", "version": "1.0.0",
                  "dependencies": [{"id": "spongeapi", "version": "8.0.0"}]}]}

Both parse into a LocalModRecord. The legacy parser requires a non-empty
modid and version; the modern parser never fails on missing fields and
defaults them instead.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
from typing import Any, Literal

from oremonitor.exceptions import MetadataError, PlatformVersionError
from oremonitor.versioning.platform import (
    PLATFORM_ID,
    first_successful,
    parse_major,
    resolve_major_version,
)

SchemaName = Literal["legacy", "modern"]


@dataclass(frozen=True)
class LocalModRecord:
    """Normalized plugin metadata read from a local archive.

    Attributes:
        mod_id: Plugin id (Ore plugin_id), e.g. "nucleus".
        display_name: Human readable name.
        version: Local version string; free-form ("2.0.0PRE9H2").
        dependency_specs: "<id>@<version>" strings in declaration order.
        required_specs: Legacy "requiredMods" list, same shape.
        major_api_version: Platform API major version, or None when the
            legacy lists contain no parseable platform dependency.
        schema: Which metadata format produced this record.
        archive_path: Archive the record was read from, if any.
    """

    mod_id: str
    display_name: str
    version: str
    dependency_specs: tuple[str, ...] = ()
    required_specs: tuple[str, ...] = ()
    major_api_version: int | None = None
    schema: SchemaName = "legacy"
    archive_path: Path | None = None

    def platform_major(self) -> int:
        """Return the platform API major version.

        Raises:
            PlatformVersionError: If it could not be resolved.
        """
        if self.major_api_version is None:
            raise PlatformVersionError(
                f"Unable to find Sponge API dependency for {self.mod_id!r}; "
                "cannot determine platform compatibility"
            )
        return self.major_api_version


def _load_json(text: str, filename: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as err:
        raise MetadataError(f"Invalid JSON in {filename}: {err}") from err


def _string_list(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(item for item in value if isinstance(item, str))


def _string(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


# ----------------------------
# Legacy: mcmod.info
# ----------------------------


def _legacy_entry(data: Any) -> dict[str, Any]:
    if isinstance(data, dict) and isinstance(data.get("info"), dict):
        return data["info"]
    if isinstance(data, dict) and isinstance(data.get("modList"), list):
        data = data["modList"]
    if isinstance(data, list) and data and isinstance(data[0], dict):
        return data[0]
    raise MetadataError("mcmod.info has no 'info' object or mod list entry")


def parse_legacy(text: str, platform_id: str = PLATFORM_ID) -> LocalModRecord:
    """Parse ``mcmod.info`` content into a LocalModRecord.

    The platform major version is resolved from ``dependencies`` first and
    ``requiredMods`` second; it is None when neither yields one.

    Raises:
        MetadataError: On invalid JSON, an unrecognized layout, or an
            empty modid/version.
    """
    info = _legacy_entry(_load_json(text, "mcmod.info"))

    mod_id = _string(info.get("modid")).strip()
    version = _string(info.get("version")).strip()
    if not mod_id or not version:
        raise MetadataError("mcmod.info must declare a non-empty modid and version")

    dependencies = _string_list(info.get("dependencies"))
    required = _string_list(info.get("requiredMods"))

    return LocalModRecord(
        mod_id=mod_id,
        display_name=_string(info.get("name"), mod_id),
        version=version,
        dependency_specs=dependencies,
        required_specs=required,
        major_api_version=resolve_major_version([dependencies, required], platform_id),
        schema="legacy",
    )


# ----------------------------
# Modern: META-INF/sponge_plugins.json
# ----------------------------


def _dependencies(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [d for d in value if isinstance(d, dict)]


def _dependency_spec(dep: dict[str, Any]) -> str:
    dep_id = _string(dep.get("id"))
    dep_version = _string(dep.get("version"))
    return f"{dep_id}@{dep_version}" if dep_version else dep_id


def parse_modern(text: str, platform_id: str = PLATFORM_ID) -> LocalModRecord:
    """Parse ``sponge_plugins.json`` content into a LocalModRecord.

    Only the first plugin entry is used; an empty ``plugins`` list yields an
    empty record. Dependencies come from ``global`` when present, otherwise
    from the first plugin. The platform major version defaults to 0.

    Raises:
        MetadataError: On invalid JSON or a document that is not an object.
    """
    data = _load_json(text, "sponge_plugins.json")
    if not isinstance(data, dict):
        raise MetadataError("sponge_plugins.json must be a JSON object")

    global_section = data.get("global")
    plugins = data.get("plugins")
    plugin: dict[str, Any] = {}
    if isinstance(plugins, list) and plugins and isinstance(plugins[0], dict):
        plugin = plugins[0]

    if isinstance(global_section, dict):
        dependencies = _dependencies(global_section.get("dependencies"))
        fallback_version = _string(global_section.get("version"))
    else:
        dependencies = _dependencies(plugin.get("dependencies"))
        fallback_version = ""

    wanted = platform_id.lower()
    major = first_successful(
        [dependencies],
        lambda d: parse_major(_string(d.get("version")))
        if _string(d.get("id")).lower() == wanted
        else None,
    )

    version = _string(plugin.get("version"), fallback_version) or fallback_version
    return LocalModRecord(
        mod_id=_string(plugin.get("id")),
        display_name=_string(plugin.get("name")),
        version=version.replace(" ", "-"),
        dependency_specs=tuple(_dependency_spec(d) for d in dependencies),
        major_api_version=major if major is not None else 0,
        schema="modern",
    )
