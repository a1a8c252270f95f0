"""
Ore Monitor

A Python CLI for working with Sponge plugins hosted on Ore
(https://ore.spongepowered.org).

Ore Monitor provides:
  - Project search and project/version details from the Ore v2 API
  - Plugin downloads with retries, atomic writes and checksums
  - Update checks: reads plugin metadata from local jars (legacy
    ``mcmod.info`` and modern ``META-INF/sponge_plugins.json``) and
    compares it with the version Ore promotes for the same SpongeAPI
    major version

Quick Start
-----------
Check a plugin folder:

    $ oremon check ./mods

Search Ore:

    $ oremon search chat --limit 5

For full CLI documentation:

    $ oremon --help

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
core : module
    High-level orchestration (check, install).
config : package
    YAML configuration loading and merging.
archive : package
    Plugin metadata extraction from jar/zip archives.
versioning : package
    Platform version resolution, remote matching and version comparison.
ore : package
    Ore API session, client and response models.
io : package
    Plugin file downloads.

Public API
----------
    from oremonitor.core import check_versions, install_plugin
    from oremonitor.config import load_effective_config
    from oremonitor.archive import extract_archive, extract_directory
    from oremonitor.versioning import compare_versions, version_from_tag
    from oremonitor.ore import OreClient

For more details, see the individual module docstrings.
"""

__version__ = "0.1.0"
__description__ = "Ore Monitor - search, install and update-check Sponge plugins on Ore"

# Re-export commonly used functions for convenience
from oremonitor.archive import LocalModRecord, extract_archive, extract_directory
from oremonitor.config import load_effective_config
from oremonitor.core import check_versions, install_plugin
from oremonitor.versioning import VersionStatus, compare_versions, version_from_tag

__all__ = [
    "LocalModRecord",
    "VersionStatus",
    "__version__",
    "check_versions",
    "compare_versions",
    "extract_archive",
    "extract_directory",
    "install_plugin",
    "load_effective_config",
    "version_from_tag",
]
