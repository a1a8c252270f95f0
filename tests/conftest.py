"""
Pytest configuration and shared fixtures for Ore Monitor tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
import zipfile

import pytest
import yaml

from oremonitor.logging import SilentLogger, set_global_logger


@pytest.fixture(autouse=True)
def _silent_logger():
    """Reset the global logger so verbose CLI tests do not leak output."""
    set_global_logger(SilentLogger())
    yield
    set_global_logger(SilentLogger())


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("config.yaml", {"key": "value"})
    """

    def _create(filename: str, data: Any) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create


@pytest.fixture
def create_jar(tmp_test_dir: Path):
    """
    Factory fixture for creating plugin archives.

    Usage:
        jar = create_jar("nucleus.jar", {"mcmod.info": [...]})

    Dict/list values are written as JSON, str values as-is.
    """

    def _create(filename: str, entries: dict[str, Any]) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(path, "w") as zf:
            for name, content in entries.items():
                text = content if isinstance(content, str) else json.dumps(content)
                zf.writestr(name, text)
        return path

    return _create


@pytest.fixture
def nucleus_mcmod() -> list[dict[str, Any]]:
    """Legacy metadata for Nucleus built against SpongeAPI 7."""
    return [
        {
            "modid": "nucleus",
            "name": "Nucleus",
            "version": "2.1.4",
            "dependencies": ["spongeapi@7.3"],
            "requiredMods": [],
        }
    ]


@pytest.fixture
def huskycrates_mcmod() -> list[dict[str, Any]]:
    """Legacy metadata with a vendor prerelease suffix and SNAPSHOT API."""
    return [
        {
            "modid": "huskycrates",
            "name": "HuskyCrates",
            "version": "2.0.0PRE9H2",
            "dependencies": ["spongeapi@7.1.0-SNAPSHOT"],
        }
    ]


@pytest.fixture
def modern_plugins_json() -> dict[str, Any]:
    """Modern metadata for a SpongeAPI 8 plugin."""
    return {
        "loader": {"name": "java_plain", "version": "1.0"},
        "global": {
            "version": "1.2.0",
            "dependencies": [
                {"id": "spongeapi", "version": "8.0.0"},
                {"id": "luckperms", "version": "5.4"},
            ],
        },
        "plugins": [
            {"id": "worldguardian", "name": "World Guardian", "version": "1.2.0"}
        ],
    }


@pytest.fixture
def project_payload() -> dict[str, Any]:
    """Ore v2 project JSON with promoted versions for API 6 and 7."""
    return {
        "plugin_id": "nucleus",
        "name": "Nucleus",
        "namespace": {"owner": "Ore", "slug": "Nucleus"},
        "promoted_versions": [
            {
                "version": "1.14.0",
                "tags": [
                    {
                        "name": "Sponge",
                        "data": "6.0.0",
                        "display_data": "6.0",
                        "minecraft_version": "1.11.2",
                        "color": {"foreground": "#fff", "background": "#f7cf0d"},
                    }
                ],
            },
            {
                "version": "2.1.5",
                "tags": [
                    {
                        "name": "Sponge",
                        "data": "7.3.0",
                        "display_data": "7.3",
                        "minecraft_version": "1.12.2",
                        "color": {"foreground": "#fff", "background": "#f7cf0d"},
                    }
                ],
            },
        ],
        "stats": {
            "views": 1000,
            "downloads": 500,
            "recent_views": 10,
            "recent_downloads": 5,
            "stars": 42,
            "watchers": 7,
        },
        "category": "admin_tools",
        "description": "The ultimate essentials plugin.",
        "created_at": "2017-01-01T12:00:00Z",
        "last_updated": "2021-05-01T12:00:00.123Z",
        "visibility": "public",
        "settings": {"license": {"name": "MIT", "url": "https://mit.example"}},
        "icon_url": "https://ore.example.test/icon.png",
    }


@pytest.fixture
def version_payload() -> dict[str, Any]:
    """Ore v2 version JSON."""
    return {
        "name": "2.1.5",
        "created_at": "2021-05-01T12:00:00Z",
        "dependencies": [{"plugin_id": "spongeapi", "version": "7.3.0"}],
        "visibility": "public",
        "description": None,
        "stats": {"downloads": 321},
        "file_info": {
            "name": "Nucleus-2.1.5-S7.3-MC1.12.2-plugin.jar",
            "size_bytes": 1572864,
            "md_5_hash": "0123456789abcdef0123456789abcdef",
        },
        "author": "dualspiral",
        "review_state": "reviewed",
        "tags": [{"name": "Sponge", "data": "7.3.0", "color": {}}],
    }


@pytest.fixture
def session_payload() -> dict[str, Any]:
    return {"session": "sess-123", "expires": "2030-01-01T00:00:00Z", "type": "public"}
