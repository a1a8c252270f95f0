"""
Version resolution and comparison for Ore Monitor.

This package holds the domain logic of the ``check`` command: deciding
which platform API generation a local plugin targets, picking the promoted
Ore version for that generation, and comparing the two version strings.

Modules
-------
platform : module
    Platform API major version resolution from "<id>@<version>" specs.
remote : module
    Selection of the promoted version tagged with a given major version.
keys : module
    Lenient, total ordering over free-form version strings.
status : module
    Three-way VersionStatus (outdated / up to date / newer than remote).

Public API
----------
resolve_major_version : function
    First parseable platform major version across ordered spec lists.
version_from_tag : function
    Label of the first promoted version tagged with a major version.
compare_any : function
    Compare two version strings, returning -1, 0, or 1.
compare_versions : function
    Compare local against remote, returning a VersionStatus.

Examples
--------
    >>> from oremonitor.versioning import compare_versions, resolve_major_version
    >>> resolve_major_version([["spongeapi@7.3"]])
    7
    >>> str(compare_versions("2.0", "2.0"))
    'Version is up to date'
"""

from .keys import compare_any, version_key_any
from .platform import (
    PLATFORM_ID,
    PlatformVersionSpec,
    first_successful,
    parse_dependency_spec,
    parse_major,
    resolve_major_version,
)
from .remote import NO_MATCH, tagged_major_version, version_from_tag
from .status import VersionStatus, compare_versions
