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

"""Session authentication against the Ore v2 API.

Every Ore API call needs a session token. ``POST /authenticate`` returns
one; with an API key the session carries the key's permissions, without
one Ore hands out a public (anonymous) session.
"""

from __future__ import annotations

import requests

from oremonitor.exceptions import NetworkError
from oremonitor.logging import get_global_logger

from .models import OreSession


class OreAuth:
    """Obtains an OreSession for an API base URL."""

    def __init__(
        self,
        api_url: str,
        api_key: str | None = None,
        *,
        timeout: int = 30,
        http: requests.Session | None = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key or None
        self.timeout = timeout
        self._http = http or requests.Session()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"OreApi apikey={self.api_key}"
        return headers

    def authenticate(self) -> OreSession:
        """Request a new session.

        Returns:
            The session token and its expiry.

        Raises:
            NetworkError: If the request fails, is rejected, or the response
                carries no session.
        """
        logger = get_global_logger()
        url = f"{self.api_url}/authenticate"
        logger.verbose(
            "AUTH",
            "Authenticating with API key" if self.api_key else "Requesting public session",
        )
        try:
            response = self._http.post(url, headers=self._headers(), timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as err:
            raise NetworkError(
                f"Ore authentication failed: {response.status_code} {response.reason}"
            ) from err
        except requests.exceptions.RequestException as err:
            raise NetworkError(f"Failed to reach Ore at {url}: {err}") from err

        try:
            payload = response.json()
        except ValueError as err:
            raise NetworkError("Ore authentication returned invalid JSON") from err

        session = OreSession.from_dict(payload if isinstance(payload, dict) else {})
        if not session.session:
            raise NetworkError("Ore authentication response has no session")
        logger.debug("AUTH", f"Session expires: {session.expires}")
        return session
