"""Public package surface for msfslayout.

Exports the two layout entry points plus ``main`` for programmatic CLI
invocation. Most implementation lives in submodules under ``msfslayout``.
"""

from __future__ import annotations

from .errors import DirectoryReadError, LayoutError, LayoutGenerationError, ManifestReadError, ManifestWriteError
from .orchestrator import ProcessOptions, ProcessOutcome, ProcessResult, generate_layout, process_layout


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "DirectoryReadError",
    "LayoutError",
    "LayoutGenerationError",
    "ManifestReadError",
    "ManifestWriteError",
    "ProcessOptions",
    "ProcessOutcome",
    "ProcessResult",
    "generate_layout",
    "process_layout",
    "main",
]
