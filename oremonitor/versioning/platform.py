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

"""Platform API major version resolution from dependency specs.

Plugins declare the platform API they were built against as a dependency
spec such as ``"spongeapi@7.3"`` or ``"spongeapi@7.1.0-SNAPSHOT"``. The
integer before the first dot is the platform API major version, and it
decides which promoted version on Ore a local plugin is compared against.

Matching rules:
- The id part must start with the platform id (case-insensitive).
- Specs without "@" or whose version has no "." never match.
- The leading segment must parse as an unsigned 32-bit integer.
- The first *successfully parsed* spec wins; an id match whose version is
  "SNAPSHOT" does not stop the scan.
- Candidate lists are tried in order; later lists are only consulted when
  earlier ones yield nothing.

Example:
    >>> resolve_major_version([["spongeapi@SNAPSHOT", "spongeapi@7.1.0"]])
    7
    >>> resolve_major_version([["placeholderapi"], ["spongeapi@7.3"]])
    7
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import TypeVar

PLATFORM_ID = "spongeapi"
_U32_MAX = 2**32 - 1

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class PlatformVersionSpec:
    """A single parsed dependency entry.

    Attributes:
        platform_id: Id portion of the spec (left of "@").
        major: Leading integer of the version portion, or None when the
            version has no "." or its first segment is not an unsigned
            32-bit integer.
    """

    platform_id: str
    major: int | None


def parse_major(version: str) -> int | None:
    """Parse the leading dot-separated segment of a version as a u32.

    Returns None when there is no "." or the segment is not a plain
    unsigned integer in range.
    """
    head, sep, _ = version.partition(".")
    if not sep or not head.isascii() or not head.isdigit():
        return None
    major = int(head)
    return major if major <= _U32_MAX else None


def parse_dependency_spec(spec: str) -> PlatformVersionSpec | None:
    """Split ``"<id>@<version>"`` into a PlatformVersionSpec.

    Returns None for specs without an "@" separator.
    """
    platform_id, sep, version = spec.partition("@")
    if not sep:
        return None
    return PlatformVersionSpec(platform_id=platform_id, major=parse_major(version))


def first_successful(
    candidates: Iterable[Sequence[T]], parse: Callable[[T], R | None]
) -> R | None:
    """Return the first non-None parse result across ordered candidate lists."""
    for items in candidates:
        for item in items:
            result = parse(item)
            if result is not None:
                return result
    return None


def major_from_spec(spec: str, platform_id: str = PLATFORM_ID) -> int | None:
    """Return the major version of ``spec`` if it targets ``platform_id``."""
    parsed = parse_dependency_spec(spec)
    if parsed is None or not parsed.platform_id.lower().startswith(
        platform_id.lower()
    ):
        return None
    return parsed.major


def resolve_major_version(
    spec_lists: Iterable[Sequence[str]], platform_id: str = PLATFORM_ID
) -> int | None:
    """Resolve the platform API major version from ordered dependency lists.

    Args:
        spec_lists: Candidate lists in priority order, e.g.
            ``[dependency_specs, required_specs]``.
        platform_id: Platform dependency id to look for.

    Returns:
        The major version of the first parseable matching spec, or None.
    """
    return first_successful(spec_lists, lambda s: major_from_spec(s, platform_id))
