"""Error types surfaced at the package boundary.

Each error names the offending path and the underlying cause so callers can
pattern-match on the type and still print something useful.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .orchestrator import ProcessOutcome


class LayoutError(Exception):
    """Base class for failures while building or updating package documents."""

    action = "Failed to process"

    def __init__(self, path: Path | str, cause: str) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"{self.action} {self.path}: {cause}")


class DirectoryReadError(LayoutError):
    """A directory could not be listed during the package walk."""

    action = "Failed to read directory"


class ManifestReadError(LayoutError):
    """The metadata document could not be read, parsed, or is not an object."""

    action = "Failed to read JSON at"


class ManifestWriteError(LayoutError):
    """Updating ``total_package_size`` failed."""

    action = "Failed to update manifest"


class LayoutGenerationError(Exception):
    """Validation failure raised by the fire-and-forget entry point."""

    def __init__(self, message: str, outcome: ProcessOutcome) -> None:
        self.outcome = outcome
        super().__init__(message)


__all__ = [
    "LayoutError",
    "DirectoryReadError",
    "ManifestReadError",
    "ManifestWriteError",
    "LayoutGenerationError",
]
