"""Filesystem walking for package directories."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from ..errors import DirectoryReadError


def list_package_files(root: Path, ignore: Iterable[Path] = ()) -> list[Path]:
    """Return absolute paths of every non-directory entry below ``root``.

    Directories are walked depth-first without following directory symlinks,
    so link cycles cannot recurse forever; symlinks to directories are left
    out. Paths listed in ``ignore`` are skipped. Raises ``DirectoryReadError``
    naming the directory that could not be listed.
    """
    root = Path(os.path.abspath(root))
    ignored = {Path(os.path.abspath(path)) for path in ignore}
    files: list[Path] = []

    def walk(directory: Path) -> None:
        try:
            with os.scandir(directory) as entries:
                children = list(entries)
        except OSError as exc:
            raise DirectoryReadError(directory, exc.strerror or str(exc)) from exc

        for child in children:
            child_path = Path(child.path)
            try:
                is_dir = child.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False
            if is_dir:
                walk(child_path)
                continue
            if child.is_symlink():
                try:
                    if child.is_dir():
                        continue
                except OSError:
                    pass
            if child_path in ignored:
                continue
            files.append(child_path)

    walk(root)
    return files


__all__ = [
    "list_package_files",
]
