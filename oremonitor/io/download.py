"""
Plugin file download for Ore Monitor.

Ore's API does not expose a download link, so ``install`` fetches the
file from the public site (``/{owner}/{slug}/versions/{version}/download``)
and has to take the file name from the response headers.

Key Features:

- **Retry Logic with Exponential Backoff** - Retries transient failures
  (429, 500, 502, 503, 504) via urllib3.util.Retry mounted on the session.
- **Atomic Writes** - Streams to ``<filename>.part`` and renames on success,
  so a plugins folder never contains a half-written jar.
- **Integrity Verification** - MD5 (what Ore publishes in ``file_info``) is
  computed while streaming. A mismatch removes the file.
- **Content-Disposition Naming** - The quoted ``filename`` wins; otherwise
  the file is saved as ``unknown_file``.

Example:
    >>> from pathlib import Path
    >>> from oremonitor.io import download_file
    >>> path, md5, headers = download_file(
    ...     "https://ore.spongepowered.org/Ore/Nucleus/versions/2.1.4/download",
    ...     Path("./mods"),
    ... )

Notes:
- Timeouts are per-request, not total download time.
- All HTTP errors are raised as NetworkError and chained.
"""

from __future__ import annotations

import hashlib
from pathlib import Path
import time

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from oremonitor.exceptions import NetworkError
from oremonitor.logging import get_global_logger

# Stream size per chunk (1 MiB).
DEFAULT_CHUNK = 1024 * 1024
DEFAULT_FILE_NAME = "unknown_file"
DEFAULT_USER_AGENT = "Ore-Monitor"


def _filename_from_cd(content_disposition: str) -> str | None:
    """
    Extract a filename from a Content-Disposition header if present.

    Example header:
      'attachment; filename="Nucleus-2.1.4-S7.1-MC1.12.2-plugin.jar"'

    Only the final path component is kept so a header cannot write
    outside the destination folder.
    """
    if not content_disposition:
        return None
    for part in (s.strip() for s in content_disposition.split(";")):
        if part.lower().startswith("filename="):
            value = part.split("=", 1)[1].strip().strip('"')
            name = Path(value.replace("\\", "/")).name
            if name in ("", ".", ".."):
                return None
            return name
    return None


def make_session(user_agent: str = DEFAULT_USER_AGENT) -> requests.Session:
    """
    Create a requests.Session with sane retry/backoff defaults.

    - Retries on common transient status codes.
    - Applies exponential backoff.
    - Identifies the client with a User-Agent.
    """
    s = requests.Session()
    retries = Retry(
        total=5,
        backoff_factor=0.5,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET", "HEAD", "POST"),
        raise_on_status=False,
    )
    s.headers.update({"User-Agent": user_agent})
    s.mount("http://", HTTPAdapter(max_retries=retries))
    s.mount("https://", HTTPAdapter(max_retries=retries))
    return s


def download_file(
    url: str,
    destination_folder: Path,
    *,
    session: requests.Session | None = None,
    headers: dict[str, str] | None = None,
    expected_md5: str | None = None,
    timeout: int = 60,
) -> tuple[Path, str, dict]:
    """Download a plugin file into destination_folder.

    Follows redirects and retries transient failures. Writes to
    <filename>.part then renames to <filename> on success.

    Args:
        url: Source URL.
        destination_folder: Folder to save into (created if missing).
        session: Session to reuse; a retrying session is created if None.
        headers: Extra request headers (e.g. the Ore session header).
        expected_md5: Optional MD5 (hex) published by Ore. If set and
            mismatched, the file is removed and NetworkError is raised.
        timeout: Per-request timeout (seconds).

    Returns:
        A tuple (file_path, md5_hex, headers_dict).

    Raises:
        NetworkError: On connection failures, HTTP 404 (unknown plugin id
            or version), other non-2xx responses, or checksum mismatch.
    """
    logger = get_global_logger()
    destination_folder = Path(destination_folder)
    destination_folder.mkdir(parents=True, exist_ok=True)

    owns_session = session is None
    http = session or make_session()
    logger.verbose("HTTP", f"GET {url}")
    try:
        try:
            resp = http.get(
                url,
                stream=True,
                allow_redirects=True,
                timeout=timeout,
                headers=headers or {},
            )
        except requests.exceptions.RequestException as err:
            raise NetworkError(f"download failed for {url}: {err}") from err

        for hist in resp.history:
            logger.debug(
                "HTTP",
                f"Redirect {hist.status_code} -> {hist.headers.get('Location', 'unknown')}",
            )

        if resp.status_code == 404:
            resp.close()
            raise NetworkError(
                "Resource not available, ensure you're using a valid ID & Version!"
            )
        try:
            resp.raise_for_status()
        except requests.HTTPError as err:
            resp.close()
            raise NetworkError(f"download failed for {url}: {err}") from err

        logger.verbose("HTTP", f"Response: {resp.status_code} {resp.reason}")

        filename = (
            _filename_from_cd(resp.headers.get("Content-Disposition", ""))
            or DEFAULT_FILE_NAME
        )
        target = destination_folder / filename
        tmp = target.with_name(target.name + ".part")
        logger.verbose("FILE", f"Downloading to: {tmp}")

        md5 = hashlib.md5()
        started_at = time.time()
        try:
            with tmp.open("wb") as f:
                for chunk in resp.iter_content(chunk_size=DEFAULT_CHUNK):
                    if not chunk:
                        continue
                    f.write(chunk)
                    md5.update(chunk)
        except requests.exceptions.RequestException as err:
            tmp.unlink(missing_ok=True)
            raise NetworkError(f"download interrupted for {url}: {err}") from err
        except OSError as err:
            tmp.unlink(missing_ok=True)
            raise NetworkError(f"cannot write {tmp}: {err}") from err
        finally:
            resp.close()

        digest = md5.hexdigest()
        logger.verbose("FILE", f"MD5: {digest}")

        if expected_md5 and digest.lower() != expected_md5.lower():
            tmp.unlink(missing_ok=True)
            raise NetworkError(
                f"md5 mismatch for {filename}: got {digest}, expected {expected_md5}"
            )

        logger.verbose("FILE", f"Atomic rename: {tmp.name} -> {target.name}")
        try:
            tmp.replace(target)
        except OSError as err:
            tmp.unlink(missing_ok=True)
            raise NetworkError(f"cannot save {target}: {err}") from err
        logger.verbose(
            "FILE", f"Download complete: {target} in {time.time() - started_at:.1f}s"
        )
        return target, digest, dict(resp.headers)
    finally:
        if owns_session:
            http.close()
