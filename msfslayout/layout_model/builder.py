"""Turn scanned package files into a sorted layout document.

Every stattable file whose absolute path fits the legacy path ceiling adds
its size to ``total_size``, including excluded files. Only non-excluded files
become content entries.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from ..jsonio import dump_json
from .exclusion import is_excluded
from .filetime import filetime_from_mtime_ns
from .types import ContentEntry, LayoutDocument

# Longest absolute path (in characters) the target platform accepts.
MAX_PATH_LENGTH = 259


@dataclass(frozen=True)
class LayoutBuild:
    """Outcome of one build pass over a scanned file list."""

    document: LayoutDocument
    total_size: int
    scanned_count: int
    skipped_files: int
    long_paths: tuple[Path, ...] = ()

    @property
    def has_long_paths(self) -> bool:
        return bool(self.long_paths)


def relative_posix_path(root: Path, path: Path) -> str:
    """Return ``path`` relative to ``root`` using ``/`` separators."""
    return os.path.relpath(path, root).replace(os.sep, "/")


def build_layout(
    root: Path,
    files: Iterable[Path],
    *,
    stat_file: Callable[[Path], os.stat_result] = os.stat,
    on_debug: Callable[[str], None] | None = None,
) -> LayoutBuild:
    """Build a layout document for ``files`` found under ``root``.

    Paths longer than ``MAX_PATH_LENGTH`` are dropped entirely and recorded in
    ``long_paths``. Files that cannot be stat'ed, names that are not valid
    UTF-8, and excluded files all count as skipped.
    """

    def debug(message: str) -> None:
        if on_debug is not None:
            on_debug(message)

    total_size = 0
    skipped = 0
    scanned = 0
    long_paths: list[Path] = []
    content: list[ContentEntry] = []

    for path in files:
        scanned += 1
        if len(str(path)) > MAX_PATH_LENGTH:
            long_paths.append(path)
            debug(f"Skipping long path: {path}")
            continue

        relative_path = relative_posix_path(root, path)
        try:
            # Undecodable names surface as lone surrogates that layout.json cannot hold.
            relative_path.encode("utf-8")
        except UnicodeEncodeError as exc:
            skipped += 1
            debug(f"Error processing file {path!r}: {exc}")
            continue

        try:
            stat = stat_file(path)
        except OSError as exc:
            skipped += 1
            debug(f"Error processing file {path}: {exc}")
            continue

        total_size += int(stat.st_size)
        if is_excluded(relative_path):
            skipped += 1
            debug(f"Excluding file: {relative_path}")
            continue

        content.append(
            ContentEntry(
                path=relative_path,
                size=int(stat.st_size),
                date=filetime_from_mtime_ns(int(stat.st_mtime_ns)),
            )
        )

    content.sort(key=lambda entry: entry.path)
    return LayoutBuild(
        document=LayoutDocument(content=tuple(content)),
        total_size=total_size,
        scanned_count=scanned,
        skipped_files=skipped,
        long_paths=tuple(long_paths),
    )


def serialize_layout(document: LayoutDocument) -> str:
    """Render ``document`` as the on-disk ``layout.json`` text."""
    return dump_json(document.to_json())


__all__ = [
    "MAX_PATH_LENGTH",
    "LayoutBuild",
    "relative_posix_path",
    "build_layout",
    "serialize_layout",
]
