"""Injectable message sink for layout runs.

``LayoutReporter`` wraps a ``logging.Logger`` and applies the run options:
quiet runs drop informational and success chatter, and diagnostic detail is
only emitted for debug runs. Warnings and errors always go through.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .logging_setup import get_logger


@dataclass
class LayoutReporter:
    logger: logging.Logger = field(default_factory=lambda: get_logger("layout"))
    quiet: bool = False
    debug_enabled: bool = False

    def info(self, message: str) -> None:
        if not self.quiet:
            self.logger.info(message)

    def success(self, message: str) -> None:
        if not self.quiet:
            self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)

    def debug(self, message: str) -> None:
        if self.debug_enabled and not self.quiet:
            self.logger.debug(message)


__all__ = ["LayoutReporter"]
