"""
Tests for oremonitor.versioning.remote module.

Tests matching a local platform major version to a promoted Ore version.
"""

from __future__ import annotations

from oremonitor.ore.models import Project, PromotedVersion, PromotedVersionTag
from oremonitor.versioning.remote import NO_MATCH, tagged_major_version, version_from_tag


def _promoted(version: str, *tags: tuple[str, str | None]) -> PromotedVersion:
    return PromotedVersion(
        version=version,
        tags=tuple(PromotedVersionTag(name=name, display_data=data) for name, data in tags),
    )


PROMOTED = [
    _promoted("1.0", ("Sponge API", "6.2")),
    _promoted("2.0", ("Sponge API", "7.3")),
]


class TestVersionFromTag:
    """Tests for version_from_tag."""

    def test_match(self):
        assert version_from_tag(PROMOTED, 7) == "2.0"

    def test_no_match_returns_empty(self):
        assert version_from_tag(PROMOTED, 9) == NO_MATCH == ""

    def test_first_match_wins(self):
        promoted = [_promoted("2.1", ("Sponge", "7.3")), _promoted("2.0", ("Sponge", "7.1"))]
        assert version_from_tag(promoted, 7) == "2.1"

    def test_empty_list(self):
        assert version_from_tag([], 7) == ""

    def test_untagged_versions_count_as_zero(self):
        """Test that a version without a usable tag is matched by major 0."""
        promoted = [_promoted("0.9"), _promoted("1.0", ("Sponge", "7.3"))]
        assert version_from_tag(promoted, 0) == "0.9"

    def test_project_delegates(self, project_payload):
        project = Project.from_dict(project_payload)
        assert project.version_from_tag(7) == "2.1.5"
        assert project.version_from_tag(6) == "1.14.0"
        assert project.version_from_tag(8) == ""


class TestTaggedMajorVersion:
    """Tests for tagged_major_version."""

    def test_uses_first_sponge_tag(self):
        promoted = _promoted("1.0", ("Minecraft", "1.12.2"), ("Sponge", "7.3"), ("Sponge", "8.0"))
        assert tagged_major_version(promoted) == 7

    def test_missing_display_data(self):
        assert tagged_major_version(_promoted("1.0", ("Sponge", None))) == 0

    def test_no_dot(self):
        assert tagged_major_version(_promoted("1.0", ("Sponge", "7"))) == 0

    def test_non_numeric(self):
        assert tagged_major_version(_promoted("1.0", ("Sponge", "x.1"))) == 0

    def test_name_must_contain_sponge(self):
        assert tagged_major_version(_promoted("1.0", ("Forge", "14.23"))) == 0
