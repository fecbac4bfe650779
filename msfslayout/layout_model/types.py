"""Domain datatypes for the package layout document."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ContentEntry:
    """One file record: POSIX path relative to the package root, size, FILETIME date."""

    path: str
    size: int
    date: int

    def to_json(self) -> dict[str, object]:
        return {"path": self.path, "size": self.size, "date": self.date}


@dataclass(frozen=True)
class LayoutDocument:
    """Layout document with content entries sorted by path."""

    content: tuple[ContentEntry, ...] = ()

    def to_json(self) -> dict[str, object]:
        return {"content": [entry.to_json() for entry in self.content]}


__all__ = [
    "ContentEntry",
    "LayoutDocument",
]
