"""
Tests for oremonitor.cli module.

Tests the command handlers and output formatting with the Ore client and
configuration patched out.
"""

from __future__ import annotations

import copy
from unittest.mock import MagicMock, patch

import pytest

from oremonitor.cli import format_check, format_project, format_version, human_bytes, main
from oremonitor.config import DEFAULT_CONFIG
from oremonitor.exceptions import NetworkError
from oremonitor.ore import Category, PaginatedProjects, PaginatedVersions, Project, Version
from oremonitor.results import InstallResult, VersionComparisonResult
from oremonitor.versioning import VersionStatus


def _run_cli(argv: list[str], client: MagicMock) -> int:
    with (
        patch("oremonitor.cli.load_effective_config", return_value=copy.deepcopy(DEFAULT_CONFIG)),
        patch("oremonitor.cli.OreClient.from_config", return_value=client),
    ):
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
    return exc_info.value.code


class TestFormatting:
    """Tests for output formatting helpers."""

    @pytest.mark.parametrize(
        ("size", "expected"),
        [(512, "512 B"), (1536, "1.5 KiB"), (1572864, "1.5 MiB"), (1024**3, "1 GiB")],
    )
    def test_human_bytes(self, size, expected):
        assert human_bytes(size) == expected

    def test_format_check_unknown(self):
        result = VersionComparisonResult("nucleus", "2.1.4", "", None)
        assert format_check(result) == (
            "ModID: nucleus\n"
            "Local Version : 2.1.4\n"
            "Remote Version : unknown\n"
            "Version Status : unknown"
        )

    def test_format_check_status(self):
        result = VersionComparisonResult("nucleus", "2.1.4", "2.1.5", VersionStatus.OUT_OF_DATE)
        assert "Version Status : Version is outdated" in format_check(result)

    def test_format_project(self, project_payload):
        text = format_project(Project.from_dict(project_payload))

        assert "Plugin ID : nucleus" in text
        assert "Author : Ore" in text
        assert "Promoted Version : 1.14.0 - Sponge 6.0\n\t| 2.1.5 - Sponge 7.3" in text
        assert "Stars : 42" in text

    def test_format_version(self, version_payload):
        text = format_version(Version.from_dict(version_payload))

        assert "[2.1.5]" in text
        assert "Dependencies : [spongeapi:7.3.0]" in text
        assert "# Bytes : 1.5 MiB" in text
        assert "# md_5 : 0123456789abcdef0123456789abcdef" in text


class TestCommands:
    """Tests for cmd_* handlers via main()."""

    def test_check(self, tmp_test_dir, capsys):
        client = MagicMock()
        results = [VersionComparisonResult("nucleus", "2.1.4", "2.1.5", VersionStatus.OUT_OF_DATE)]
        with patch("oremonitor.cli.check_versions", return_value=results) as mock_check:
            code = _run_cli(["check", str(tmp_test_dir)], client)

        assert code == 0
        assert "ModID: nucleus" in capsys.readouterr().out
        assert mock_check.call_args.args[2] == "spongeapi"
        client.close.assert_called_once()

    def test_check_defaults_to_current_dir(self, capsys):
        with patch("oremonitor.cli.check_versions", return_value=[]) as mock_check:
            code = _run_cli(["check"], MagicMock())

        assert code == 0
        assert str(mock_check.call_args.args[1]) == "."

    def test_search(self, project_payload, capsys):
        client = MagicMock()
        client.search_projects.return_value = PaginatedProjects.from_dict(
            {"pagination": {"limit": 5, "offset": 0, "count": 1}, "result": [project_payload]}
        )

        code = _run_cli(["search", "essentials", "-c", "chat,economy", "-r", "true", "-l", "5"], client)

        assert code == 0
        assert "nucleus (Nucleus) by Ore" in capsys.readouterr().out
        kwargs = client.search_projects.call_args.kwargs
        assert kwargs["categories"] == [Category.CHAT, Category.ECONOMY]
        assert kwargs["relevance"] is True
        assert kwargs["limit"] == 5

    def test_plugin(self, project_payload, capsys):
        client = MagicMock()
        client.get_project.return_value = Project.from_dict(project_payload)

        assert _run_cli(["plugin", "nucleus"], client) == 0
        assert "Plugin ID : nucleus" in capsys.readouterr().out

    def test_plugin_versions(self, version_payload, capsys):
        client = MagicMock()
        client.list_versions.return_value = PaginatedVersions.from_dict(
            {"pagination": {}, "result": [version_payload]}
        )

        assert _run_cli(["plugin", "nucleus", "versions", "-l", "3"], client) == 0
        client.list_versions.assert_called_once_with("nucleus", tags=None, limit=3, offset=None)
        assert "[2.1.5]" in capsys.readouterr().out

    def test_plugin_single_version(self, version_payload, capsys):
        client = MagicMock()
        client.get_version.return_value = Version.from_dict(version_payload)

        assert _run_cli(["plugin", "nucleus", "versions", "2.1.5"], client) == 0
        client.get_version.assert_called_once_with("nucleus", "2.1.5")

    def test_install(self, tmp_test_dir, capsys):
        target = tmp_test_dir / "Nucleus.jar"
        with patch(
            "oremonitor.cli.install_plugin",
            return_value=InstallResult("nucleus", "2.1.5", target, "abc", "success"),
        ) as mock_install:
            code = _run_cli(["install", "nucleus", "2.1.5", "--dir", str(tmp_test_dir)], MagicMock())

        assert code == 0
        assert "Installed 'Nucleus.jar'" in capsys.readouterr().out
        assert mock_install.call_args.args[1:3] == ("nucleus", "2.1.5")

    def test_error_returns_one(self, capsys):
        client = MagicMock()
        client.get_project.side_effect = NetworkError("Status Error 404: Resource not found!")

        assert _run_cli(["plugin", "missing"], client) == 1
        assert "Error: Status Error 404" in capsys.readouterr().out
        client.close.assert_called_once()

    def test_invalid_category_rejected(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["search", "-c", "not_a_category"])
        assert exc_info.value.code == 2
