"""
Tests for oremonitor.ore package.

Tests the Ore API collaborator including:
- Session authentication (anonymous and API key)
- Request headers and query parameters
- Status code to error mapping
- Response model parsing
"""

from __future__ import annotations

import pytest
import requests
import requests_mock

from oremonitor.exceptions import NetworkError
from oremonitor.ore import (
    Category,
    OreAuth,
    OreClient,
    OreSession,
    Project,
    ProjectSort,
    Version,
    build_query,
)

API_URL = "https://ore.example.test/api/v2"
SITE_URL = "https://ore.example.test"


@pytest.fixture
def client() -> OreClient:
    return OreClient(
        OreSession(session="sess-123"),
        api_url=API_URL,
        site_url=SITE_URL,
        http=requests.Session(),
    )


class TestOreAuth:
    """Tests for OreAuth."""

    def test_anonymous_session(self, session_payload):
        with requests_mock.Mocker() as m:
            m.post(f"{API_URL}/authenticate", json=session_payload)
            session = OreAuth(API_URL).authenticate()

        assert session.session == "sess-123"
        assert session.expires is not None
        assert "Authorization" not in m.last_request.headers

    def test_api_key_header(self, session_payload):
        with requests_mock.Mocker() as m:
            m.post(f"{API_URL}/authenticate", json=session_payload)
            OreAuth(API_URL, "key-1").authenticate()

        assert m.last_request.headers["Authorization"] == "OreApi apikey=key-1"

    def test_rejected_key(self):
        with requests_mock.Mocker() as m:
            m.post(f"{API_URL}/authenticate", status_code=401)
            with pytest.raises(NetworkError, match="authentication failed"):
                OreAuth(API_URL, "bad").authenticate()

    def test_connection_error(self):
        with requests_mock.Mocker() as m:
            m.post(f"{API_URL}/authenticate", exc=requests.exceptions.ConnectionError)
            with pytest.raises(NetworkError):
                OreAuth(API_URL).authenticate()

    def test_missing_session(self):
        with requests_mock.Mocker() as m:
            m.post(f"{API_URL}/authenticate", json={"expires": "2030-01-01T00:00:00Z"})
            with pytest.raises(NetworkError, match="no session"):
                OreAuth(API_URL).authenticate()


class TestBuildQuery:
    """Tests for build_query."""

    def test_skips_none_and_repeats_lists(self):
        params = build_query(q="chat", tags=["Sponge:7", "Sponge:8"], limit=None, offset=0)
        assert params == [("q", "chat"), ("tags", "Sponge:7"), ("tags", "Sponge:8"), ("offset", "0")]

    def test_enums_and_booleans(self):
        params = build_query(
            categories=[Category.CHAT, Category.ECONOMY],
            sort=ProjectSort.RECENT_DOWNLOADS,
            relevance=False,
        )
        assert params == [
            ("categories", "chat"),
            ("categories", "economy"),
            ("sort", "recent_downloads"),
            ("relevance", "false"),
        ]


class TestOreClient:
    """Tests for OreClient requests."""

    def test_session_header(self, client, project_payload):
        with requests_mock.Mocker() as m:
            m.get(f"{API_URL}/projects/nucleus", json=project_payload)
            client.get_project("nucleus")

        assert m.last_request.headers["Authorization"] == "OreApi session=sess-123"
        assert m.last_request.headers["Accept"] == "application/json"

    def test_get_project(self, client, project_payload):
        with requests_mock.Mocker() as m:
            m.get(f"{API_URL}/projects/nucleus", json=project_payload)
            project = client.get_project("nucleus")

        assert isinstance(project, Project)
        assert project.plugin_id == "nucleus"
        assert project.namespace.owner == "Ore"
        assert project.stats.stars == 42
        assert project.settings.license_name == "MIT"
        assert [p.version for p in project.promoted_versions] == ["1.14.0", "2.1.5"]
        assert str(project.promoted_versions[1].tags[0]) == "Sponge 7.3"

    def test_search_projects(self, client, project_payload):
        payload = {"pagination": {"limit": 5, "offset": 0, "count": 1}, "result": [project_payload]}
        with requests_mock.Mocker() as m:
            m.get(f"{API_URL}/projects", json=payload)
            page = client.search_projects(
                "essentials", categories=[Category.ADMIN_TOOLS], owner="Ore", limit=5
            )

        assert page.pagination.count == 1
        assert page.result[0].plugin_id == "nucleus"
        qs = m.last_request.qs
        assert qs["q"] == ["essentials"]
        assert qs["categories"] == ["admin_tools"]
        assert qs["owner"] == ["ore"]
        assert qs["limit"] == ["5"]
        assert qs["offset"] == ["0"]

    def test_list_versions(self, client, version_payload):
        payload = {"pagination": {"limit": 10, "offset": 0, "count": 1}, "result": [version_payload]}
        with requests_mock.Mocker() as m:
            m.get(f"{API_URL}/projects/nucleus/versions", json=payload)
            page = client.list_versions("nucleus", tags=["Sponge:7.3"], limit=10)

        assert page.result[0].name == "2.1.5"
        assert m.last_request.qs["limit"] == ["10"]

    def test_get_version(self, client, version_payload):
        with requests_mock.Mocker() as m:
            m.get(f"{API_URL}/projects/nucleus/versions/2.1.5", json=version_payload)
            version = client.get_version("nucleus", "2.1.5")

        assert isinstance(version, Version)
        assert version.downloads == 321
        assert version.file_info.md5_hash == "0123456789abcdef0123456789abcdef"
        assert version.file_info.size_bytes == 1572864.0
        assert str(version.dependencies[0]) == "[spongeapi:7.3.0]"
        assert str(version.tags[0]) == "Sponge:7.3.0"

    def test_download_url(self, client, project_payload):
        project = Project.from_dict(project_payload)
        assert (
            client.download_url(project, "2.1.5")
            == f"{SITE_URL}/Ore/Nucleus/versions/2.1.5/download"
        )


class TestErrorMapping:
    """Tests for status code handling."""

    @pytest.mark.parametrize(
        ("status", "message"),
        [
            (400, "Request not made with a session"),
            (401, "Api session missing, invalid, or expired"),
            (403, "Not enough permission for endpoint"),
            (404, "Resource not found! Ensure you've used the correct identifiers"),
            (418, "Unexpected Status Code"),
        ],
    )
    def test_status_messages(self, client, status, message):
        with requests_mock.Mocker() as m:
            m.get(f"{API_URL}/projects/nucleus", status_code=status)
            with pytest.raises(NetworkError) as exc_info:
                client.get_project("nucleus")

        assert message in str(exc_info.value)
        assert str(status) in str(exc_info.value)

    def test_invalid_json(self, client):
        with requests_mock.Mocker() as m:
            m.get(f"{API_URL}/projects/nucleus", text="<html>oops</html>")
            with pytest.raises(NetworkError, match="Invalid JSON"):
                client.get_project("nucleus")

    def test_unexpected_shape(self, client):
        with requests_mock.Mocker() as m:
            m.get(f"{API_URL}/projects/nucleus", json=["not", "an", "object"])
            with pytest.raises(NetworkError, match="Unexpected response shape"):
                client.get_project("nucleus")

    def test_connection_error(self, client):
        with requests_mock.Mocker() as m:
            m.get(f"{API_URL}/projects/nucleus", exc=requests.exceptions.ConnectTimeout)
            with pytest.raises(NetworkError, match="Failed to call Ore API"):
                client.get_project("nucleus")


class TestFromConfig:
    """Tests for OreClient.from_config."""

    def test_authenticates_with_config(self, session_payload):
        config = {
            "ore": {
                "api_url": API_URL,
                "site_url": SITE_URL,
                "api_key": "key-1",
                "timeout": 5,
                "user_agent": "TestAgent",
            }
        }
        with requests_mock.Mocker() as m:
            m.post(f"{API_URL}/authenticate", json=session_payload)
            client = OreClient.from_config(config)

        assert client.session.session == "sess-123"
        assert client.timeout == 5
        assert m.last_request.headers["User-Agent"] == "TestAgent"
        assert m.last_request.headers["Authorization"] == "OreApi apikey=key-1"
