"""Domain model for package layout documents.

This package contains the non-I/O-policy pieces of layout generation:
- content entry / layout document datatypes
- FILETIME conversion for modification times
- the exclusion policy for housekeeping and conversion files
- package directory walking
- the scan-to-document build pass and its serializer
"""

from __future__ import annotations

from .types import ContentEntry, LayoutDocument
from .filetime import FILETIME_EPOCH_OFFSET_MS, filetime_from_epoch_ms, filetime_from_mtime_ns
from .exclusion import CONVERSION_DIR_NAME, EXCLUDED_FILE_NAMES, is_excluded
from .fs import list_package_files
from .builder import MAX_PATH_LENGTH, LayoutBuild, build_layout, relative_posix_path, serialize_layout

__all__ = [
    "ContentEntry",
    "LayoutDocument",
    "FILETIME_EPOCH_OFFSET_MS",
    "filetime_from_epoch_ms",
    "filetime_from_mtime_ns",
    "CONVERSION_DIR_NAME",
    "EXCLUDED_FILE_NAMES",
    "is_excluded",
    "list_package_files",
    "MAX_PATH_LENGTH",
    "LayoutBuild",
    "build_layout",
    "relative_posix_path",
    "serialize_layout",
]
