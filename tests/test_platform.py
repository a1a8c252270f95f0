"""
Tests for oremonitor.versioning.platform module.

Tests platform API major version resolution including:
- Dependency spec parsing
- First-successful-parse semantics
- Fallback from dependencies to requiredMods
- Case-insensitive platform id matching
"""

from __future__ import annotations

import pytest

from oremonitor.versioning.platform import (
    PlatformVersionSpec,
    first_successful,
    major_from_spec,
    parse_dependency_spec,
    parse_major,
    resolve_major_version,
)


class TestParseMajor:
    """Tests for parse_major."""

    @pytest.mark.parametrize(
        ("version", "expected"),
        [
            ("7.3", 7),
            ("7.1.0-SNAPSHOT", 7),
            ("10.0.0", 10),
            ("4294967295.0", 4294967295),
        ],
    )
    def test_valid(self, version, expected):
        assert parse_major(version) == expected

    @pytest.mark.parametrize(
        "version",
        ["SNAPSHOT", "7", "", ".3", "x.3", "-1.0", "4294967296.0", "7a.1"],
    )
    def test_invalid(self, version):
        """Test that versions without a dot or a u32 head yield None."""
        assert parse_major(version) is None


class TestDependencySpecs:
    """Tests for parse_dependency_spec and major_from_spec."""

    def test_parse_spec(self):
        assert parse_dependency_spec("spongeapi@7.3") == PlatformVersionSpec("spongeapi", 7)

    def test_parse_spec_without_at(self):
        assert parse_dependency_spec("spongeapi") is None

    def test_unparseable_version_keeps_id(self):
        assert parse_dependency_spec("spongeapi@SNAPSHOT") == PlatformVersionSpec(
            "spongeapi", None
        )

    def test_other_platform_ignored(self):
        assert major_from_spec("luckperms@5.4") is None

    def test_prefix_match(self):
        """Test that ids starting with the platform id match."""
        assert major_from_spec("spongeapi-core@8.1") == 8

    def test_case_insensitive(self):
        assert major_from_spec("SpongeAPI@7.2") == 7


class TestResolveMajorVersion:
    """Tests for resolve_major_version."""

    def test_idempotent(self):
        """Test that resolution is stable across calls."""
        specs = [["luckperms@5.4", "spongeapi@7.3"]]
        results = {resolve_major_version(specs) for _ in range(5)}
        assert results == {7}

    def test_fallback_to_required_list(self):
        """Test that required specs are used when dependencies yield nothing."""
        assert resolve_major_version([["spongeapi@SNAPSHOT"], ["spongeapi@7.3"]]) == 7

    def test_first_parseable_wins(self):
        """Test that an id match with an unparseable version does not stop the scan."""
        assert resolve_major_version([["spongeapi@SNAPSHOT", "spongeapi@7.1.0"]]) == 7

    def test_earlier_list_has_priority(self):
        assert resolve_major_version([["spongeapi@8.0"], ["spongeapi@7.3"]]) == 8

    def test_nothing_found(self):
        assert resolve_major_version([["placeholderapi"], []]) is None
        assert resolve_major_version([]) is None

    def test_custom_platform_id(self):
        assert resolve_major_version([["spongeapi@7.3", "forge@14.23"]], "forge") == 14


class TestFirstSuccessful:
    """Tests for the generic ordered-attempt helper."""

    def test_returns_first_non_none(self):
        result = first_successful([["a", "12", "34"]], lambda s: int(s) if s.isdigit() else None)
        assert result == 12

    def test_zero_counts_as_success(self):
        """Test that a falsy but non-None result is returned."""
        assert first_successful([["0", "5"]], lambda s: int(s)) == 0

    def test_empty(self):
        assert first_successful([[], []], lambda s: s) is None
