"""Input/Output operations for Ore Monitor.

Modules:

download : module
    HTTP(S) plugin download with retries, atomic writes, and checksums.

Public API:

download_file : function
    Download a plugin file into a directory.
make_session : function
    Create a requests.Session with retry/backoff defaults.

Example:
    from pathlib import Path
    from oremonitor.io import download_file

    file_path, md5, headers = download_file(
        url="https://ore.spongepowered.org/Ore/Nucleus/versions/2.1.4/download",
        destination_folder=Path("./mods"),
    )
"""

from .download import DEFAULT_FILE_NAME, download_file, make_session

__all__ = ["DEFAULT_FILE_NAME", "download_file", "make_session"]
