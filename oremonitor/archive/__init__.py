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

"""Local plugin archive inspection for Ore Monitor.

Public API:

- extract_archive: Read a LocalModRecord from one jar/zip file
- extract_directory: Read records from every archive in a directory
- LocalModRecord: Normalized plugin metadata
- ArchiveReader: Named-entry access to a zip archive
"""

from .extractor import (
    LEGACY_METADATA_PATH,
    MODERN_METADATA_PATH,
    STRATEGIES,
    extract_archive,
    extract_directory,
    extract_from_reader,
)
from .reader import ArchiveReader
from .schemas import LocalModRecord, parse_legacy, parse_modern

__all__ = [
    "ArchiveReader",
    "LEGACY_METADATA_PATH",
    "LocalModRecord",
    "MODERN_METADATA_PATH",
    "STRATEGIES",
    "extract_archive",
    "extract_directory",
    "extract_from_reader",
    "parse_legacy",
    "parse_modern",
]
