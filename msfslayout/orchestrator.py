"""Layout generation for one package directory.

One core run drives scan, build, write and manifest update, and reports a
``ProcessResult``. Two entry points share it:

- ``process_layout`` returns a result for every expected failure
- ``generate_layout`` raises ``LayoutGenerationError`` for validation
  failures and lets hard errors propagate
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from pathlib import Path

from .errors import LayoutError, LayoutGenerationError, ManifestWriteError
from .jsonio import write_text_atomic
from .layout_model import build_layout, list_package_files, serialize_layout
from .manifest import update_total_package_size
from .reporting import LayoutReporter

LAYOUT_FILENAME = "layout.json"
MANIFEST_FILENAME = "manifest.json"


class ProcessOutcome(enum.Enum):
    SUCCESS = "success"
    SKIPPED_EXISTING = "skipped_existing"
    MISSING_DIRECTORY = "missing_directory"
    MISSING_MANIFEST = "missing_manifest"
    NO_FILES = "no_files"
    NO_VALID_FILES = "no_valid_files"
    MANIFEST_FAILED = "manifest_failed"
    FAILED = "failed"


@dataclass(frozen=True)
class ProcessOptions:
    """Switches for one layout run."""

    force: bool = False
    quiet: bool = False
    debug: bool = False
    check_manifest: bool = True
    skip_manifest_update: bool = False


@dataclass(frozen=True)
class ProcessResult:
    """Terminal report of one layout run."""

    file_count: int
    total_size: int
    layout_path: Path
    manifest_path: Path
    skipped_files: int
    success: bool
    outcome: ProcessOutcome
    message: str | None = None
    has_long_paths: bool = False


def layout_path_for(root: Path) -> Path:
    return Path(root) / LAYOUT_FILENAME


def manifest_path_for(root: Path) -> Path:
    return Path(root) / MANIFEST_FILENAME


def _run_layout(
    root: Path,
    options: ProcessOptions,
    reporter: LayoutReporter,
    *,
    strict: bool = False,
) -> ProcessResult:
    """Run one layout pass.

    Validation failures come back as results; directory errors raise. A failed
    manifest update raises when ``strict`` and is reported as
    ``MANIFEST_FAILED`` otherwise.
    """
    layout_path = layout_path_for(root)
    manifest_path = manifest_path_for(root)

    def failed(outcome: ProcessOutcome, message: str, skipped_files: int = 0) -> ProcessResult:
        return ProcessResult(
            file_count=0,
            total_size=0,
            layout_path=layout_path,
            manifest_path=manifest_path,
            skipped_files=skipped_files,
            success=False,
            outcome=outcome,
            message=message,
        )

    if not root.is_dir():
        return failed(ProcessOutcome.MISSING_DIRECTORY, f"Directory does not exist: {root}")

    if options.check_manifest and not manifest_path.is_file():
        return failed(ProcessOutcome.MISSING_MANIFEST, f"{MANIFEST_FILENAME} not found in {root}")

    if layout_path.exists():
        if not options.force:
            return failed(
                ProcessOutcome.SKIPPED_EXISTING,
                f"{LAYOUT_FILENAME} already exists. Use --force to overwrite.",
            )
        reporter.debug(f"{LAYOUT_FILENAME} exists, will overwrite due to --force flag")
    else:
        reporter.debug(f"No existing {LAYOUT_FILENAME} found, creating new one")

    files = list_package_files(root, ignore=(layout_path, manifest_path))
    reporter.debug(f"Found {len(files)} total files in {root}")
    if not files:
        return failed(ProcessOutcome.NO_FILES, "No files found in package directory")

    build = build_layout(root, files, on_debug=reporter.debug)
    if build.has_long_paths:
        reporter.warning("One or more file paths exceed 259 characters and were skipped.")

    if not build.document.content:
        return failed(
            ProcessOutcome.NO_VALID_FILES,
            f"No valid files to include in {LAYOUT_FILENAME}",
            skipped_files=build.skipped_files,
        )

    try:
        write_text_atomic(layout_path, serialize_layout(build.document))
        total_size = build.total_size + layout_path.stat().st_size
    except OSError as exc:
        raise LayoutError(layout_path, str(exc)) from exc

    file_count = len(build.document.content)
    outcome = ProcessOutcome.SUCCESS
    message: str | None = None
    if options.skip_manifest_update:
        reporter.debug(f"Skipping {MANIFEST_FILENAME} update")
    elif not manifest_path.is_file():
        reporter.debug(f"{MANIFEST_FILENAME} not found, skipping update")
    else:
        try:
            if update_total_package_size(manifest_path, total_size):
                reporter.debug(f"Updated {MANIFEST_FILENAME} with total_package_size")
            else:
                reporter.debug(f"{MANIFEST_FILENAME} has no total_package_size, leaving it untouched")
        except ManifestWriteError as exc:
            if strict:
                raise
            outcome = ProcessOutcome.MANIFEST_FAILED
            message = f"{LAYOUT_FILENAME} was written but {MANIFEST_FILENAME} could not be updated: {exc}"

    if outcome is ProcessOutcome.SUCCESS:
        reporter.success(f"Successfully updated {LAYOUT_FILENAME} with {file_count} files")

    return ProcessResult(
        file_count=file_count,
        total_size=total_size,
        layout_path=layout_path,
        manifest_path=manifest_path,
        skipped_files=build.skipped_files,
        success=outcome is ProcessOutcome.SUCCESS,
        outcome=outcome,
        message=message,
        has_long_paths=build.has_long_paths,
    )


def _reporter_for(options: ProcessOptions, logger: logging.Logger | None) -> LayoutReporter:
    if logger is None:
        return LayoutReporter(quiet=options.quiet, debug_enabled=options.debug)
    return LayoutReporter(logger=logger, quiet=options.quiet, debug_enabled=options.debug)


def process_layout(
    package_dir: Path | str,
    options: ProcessOptions | None = None,
    *,
    logger: logging.Logger | None = None,
) -> ProcessResult:
    """Generate ``layout.json`` for ``package_dir`` and report the outcome.

    Expected failures, including unreadable directories and a malformed
    manifest, are returned as ``success=False`` results rather than raised.
    """
    options = options or ProcessOptions()
    reporter = _reporter_for(options, logger)
    root = Path(package_dir).absolute()
    try:
        result = _run_layout(root, options, reporter)
    except LayoutError as exc:
        result = ProcessResult(
            file_count=0,
            total_size=0,
            layout_path=layout_path_for(root),
            manifest_path=manifest_path_for(root),
            skipped_files=0,
            success=False,
            outcome=ProcessOutcome.FAILED,
            message=f"Error processing {root}: {exc}",
        )

    if result.outcome is ProcessOutcome.SKIPPED_EXISTING:
        reporter.warning(result.message or "")
    elif not result.success:
        reporter.error(result.message or "")
    return result


def generate_layout(package_dir: Path | str, *, logger: logging.Logger | None = None) -> None:
    """Generate ``layout.json`` with default options, raising on failure.

    An existing layout is left alone (logged, not raised). Directory and
    manifest failures propagate as ``LayoutError`` subclasses.
    """
    options = ProcessOptions()
    reporter = _reporter_for(options, logger)
    root = Path(package_dir).absolute()
    result = _run_layout(root, options, reporter, strict=True)
    if result.success:
        return
    if result.outcome is ProcessOutcome.SKIPPED_EXISTING:
        reporter.warning(result.message or "")
        return
    reporter.error(result.message or "")
    raise LayoutGenerationError(result.message or "", result.outcome)


__all__ = [
    "LAYOUT_FILENAME",
    "MANIFEST_FILENAME",
    "ProcessOutcome",
    "ProcessOptions",
    "ProcessResult",
    "layout_path_for",
    "manifest_path_for",
    "process_layout",
    "generate_layout",
]
