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

"""HTTP client for the Ore v2 API.

OreClient wraps a retrying requests.Session, adds the session and JSON
headers to every call, turns non-2xx responses into NetworkError with
Ore's documented meaning of the status code, and deserializes responses
into the models in oremonitor.ore.models.

Example:
    Open an authenticated client from configuration:
        ```python
        from oremonitor.config import load_effective_config
        from oremonitor.ore import OreClient

        client = OreClient.from_config(load_effective_config())
        project = client.get_project("nucleus")
        print(project.version_from_tag(7))
        ```
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import requests

from oremonitor.exceptions import NetworkError
from oremonitor.io.download import make_session
from oremonitor.logging import get_global_logger

from .auth import OreAuth
from .models import (
    Category,
    OreSession,
    PaginatedProjects,
    PaginatedVersions,
    Project,
    ProjectSort,
    Version,
)

DEFAULT_API_URL = "https://ore.spongepowered.org/api/v2"
DEFAULT_SITE_URL = "https://ore.spongepowered.org"

_STATUS_MESSAGES: dict[int, str] = {
    400: "Request not made with a session",
    401: "Api session missing, invalid, or expired",
    403: "Not enough permission for endpoint",
    404: "Resource not found! Ensure you've used the correct identifiers",
}

Params = list[tuple[str, str]]


def build_query(**values: Any) -> Params:
    """Build query parameters, skipping None and repeating list values.

    Example:
        >>> build_query(q="chat", tags=["Sponge:7", "Sponge:8"], limit=None)
        [('q', 'chat'), ('tags', 'Sponge:7'), ('tags', 'Sponge:8')]
    """
    params: Params = []
    for key, value in values.items():
        if value is None:
            continue
        items = value if isinstance(value, (list, tuple)) else [value]
        for item in items:
            if isinstance(item, bool):
                params.append((key, "true" if item else "false"))
            elif hasattr(item, "value"):
                params.append((key, str(item.value)))
            else:
                params.append((key, str(item)))
    return params


class OreClient:
    """Authenticated access to the Ore API."""

    def __init__(
        self,
        session: OreSession,
        *,
        api_url: str = DEFAULT_API_URL,
        site_url: str = DEFAULT_SITE_URL,
        timeout: int = 30,
        http: requests.Session | None = None,
    ) -> None:
        self.session = session
        self.api_url = api_url.rstrip("/")
        self.site_url = site_url.rstrip("/")
        self.timeout = timeout
        self.http = http or make_session()

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> OreClient:
        """Authenticate and build a client from the effective configuration."""
        ore = config.get("ore", {})
        http = make_session(ore.get("user_agent", "Ore-Monitor"))
        auth = OreAuth(
            ore.get("api_url", DEFAULT_API_URL),
            ore.get("api_key"),
            timeout=ore.get("timeout", 30),
            http=http,
        )
        return cls(
            auth.authenticate(),
            api_url=ore.get("api_url", DEFAULT_API_URL),
            site_url=ore.get("site_url", DEFAULT_SITE_URL),
            timeout=ore.get("timeout", 30),
            http=http,
        )

    def auth_headers(self) -> dict[str, str]:
        return {
            "Authorization": self.session.header_value(),
            "Accept": "application/json",
        }

    def get_json(self, path: str, params: Params | None = None) -> Any:
        """GET ``{api_url}{path}`` and return the decoded JSON body.

        Raises:
            NetworkError: On connection failures, non-2xx statuses, or a
                body that is not JSON.
        """
        url = f"{self.api_url}{path}"
        get_global_logger().debug("HTTP", f"GET {url} {params or ''}".rstrip())
        try:
            response = self.http.get(
                url, params=params, headers=self.auth_headers(), timeout=self.timeout
            )
        except requests.exceptions.RequestException as err:
            raise NetworkError(f"Failed to call Ore API {url}: {err}") from err

        if not response.ok:
            message = _STATUS_MESSAGES.get(response.status_code, "Unexpected Status Code")
            raise NetworkError(f"Status Error {response.status_code}: {message} ({url})")

        try:
            return response.json()
        except ValueError as err:
            raise NetworkError(
                f"Invalid JSON response from Ore. Response: {response.text[:200]}"
            ) from err

    def _get_object(self, path: str, params: Params | None = None) -> dict[str, Any]:
        data = self.get_json(path, params)
        if not isinstance(data, dict):
            raise NetworkError(f"Unexpected response shape from Ore for {path}")
        return data

    def search_projects(
        self,
        q: str | None = None,
        *,
        categories: Sequence[Category] | None = None,
        tags: Sequence[str] | None = None,
        owner: str | None = None,
        sort: ProjectSort | None = None,
        relevance: bool | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> PaginatedProjects:
        """Search projects (``GET /projects``)."""
        params = build_query(
            q=q,
            categories=list(categories) if categories else None,
            tags=list(tags) if tags else None,
            owner=owner,
            sort=sort,
            relevance=relevance,
            limit=limit,
            offset=offset,
        )
        return PaginatedProjects.from_dict(self._get_object("/projects", params))

    def get_project(self, plugin_id: str) -> Project:
        """Fetch a project (``GET /projects/{plugin_id}``)."""
        return Project.from_dict(self._get_object(f"/projects/{plugin_id}"))

    def list_versions(
        self,
        plugin_id: str,
        *,
        tags: Sequence[str] | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> PaginatedVersions:
        """List versions (``GET /projects/{plugin_id}/versions``)."""
        params = build_query(tags=list(tags) if tags else None, limit=limit, offset=offset)
        return PaginatedVersions.from_dict(
            self._get_object(f"/projects/{plugin_id}/versions", params)
        )

    def get_version(self, plugin_id: str, name: str) -> Version:
        """Fetch one version (``GET /projects/{plugin_id}/versions/{name}``)."""
        return Version.from_dict(self._get_object(f"/projects/{plugin_id}/versions/{name}"))

    def download_url(self, project: Project, version: str) -> str:
        """Public site URL that serves the file of ``version``."""
        ns = project.namespace
        return f"{self.site_url}/{ns.owner}/{ns.slug}/versions/{version}/download"

    def close(self) -> None:
        self.http.close()
