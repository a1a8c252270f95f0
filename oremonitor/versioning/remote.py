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

"""Matching a platform API major version against promoted versions on Ore.

A project can promote several builds at once, one per platform API
generation (e.g. one for API 7 and one for API 8). Each promoted version
carries a "Sponge" tag whose display data ("7.3") encodes that generation.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from .platform import parse_major

if TYPE_CHECKING:
    from oremonitor.ore.models import PromotedVersion

PLATFORM_TAG = "Sponge"
NO_MATCH = ""


def tagged_major_version(promoted: PromotedVersion) -> int:
    """Return the platform major version a promoted version is tagged with.

    Uses the first tag whose name contains "Sponge". Any missing piece
    (no such tag, no display data, no ".", non-numeric) yields 0.
    """
    tag = next((t for t in promoted.tags if PLATFORM_TAG in t.name), None)
    if tag is None or not tag.display_data:
        return 0
    return parse_major(tag.display_data) or 0


def version_from_tag(promoted_versions: Sequence[PromotedVersion], major: int) -> str:
    """Return the label of the first promoted version tagged with ``major``.

    Args:
        promoted_versions: The project's promoted versions in API order.
        major: Platform API major version of the local plugin.

    Returns:
        The matching version label, or NO_MATCH ("") if none matches.

    Example:
        >>> version_from_tag(project.promoted_versions, 7)
        '2.0'
    """
    for promoted in promoted_versions:
        if tagged_major_version(promoted) == major:
            return promoted.version
    return NO_MATCH
