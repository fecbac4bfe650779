"""Command-line front door for msfslayout.

Parses CLI options, resolves package directories, and runs the structured
layout entry point for each of them (or the watch session for one).
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .logging_setup import setup_logging
from .orchestrator import ProcessOptions, ProcessOutcome, process_layout
from .runtime import config, watch_layout

PROG_NAME = "msfs-layout"

EPILOG = """\
Examples:
  msfs-layout "C:\\Route To your\\Community\\Folder"
  msfs-layout "First root" "Second root"
  msfs-layout ./my-package --force
  msfs-layout ./my-package --watch

Notes:
  Each directory should contain a manifest.json file.
  Creates/updates layout.json in the same directory.
  _CVT_ directories and housekeeping files are left out of the content list.
  Updates total_package_size in manifest.json when the key is present.
"""


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def format_file_size(size: int) -> str:
    """Format a byte count with binary units, e.g. ``1536 -> '1.5 KB'``."""
    if size <= 0:
        return "0 Bytes"
    units = ("Bytes", "KB", "MB", "GB", "TB")
    value = float(size)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    return f"{round(value, 2):g} {units[index]}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG_NAME,
        description="Generate or update layout.json for MSFS community packages.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "directories",
        nargs="*",
        help="Path to MSFS package directory(ies) containing manifest.json.",
    )
    parser.add_argument("-f", "--force", action="store_true", help="Overwrite an existing layout.json.")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress non-essential output.")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging for troubleshooting.")
    parser.add_argument(
        "--no-manifest-check",
        dest="manifest_check",
        action="store_false",
        default=None,
        help="Skip the manifest.json existence check.",
    )
    parser.add_argument(
        "--skip-manifest-update",
        action="store_true",
        help="Write layout.json without touching manifest.json.",
    )
    parser.add_argument(
        "-w",
        "--watch",
        action="store_true",
        help="Regenerate layout.json whenever the package changes (one directory only).",
    )
    parser.add_argument(
        "--debounce-ms",
        type=_positive_int,
        default=None,
        help=f"Quiet period before a watch regeneration (default: {config.DEFAULT_DEBOUNCE_MS}).",
    )
    parser.add_argument(
        "--poll-interval-ms",
        type=_positive_int,
        default=None,
        help=f"Filesystem polling interval in watch mode (default: {config.DEFAULT_POLL_INTERVAL_MS}).",
    )
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the given watch timings and manifest-check choice as defaults.",
    )
    return parser


def _process_directories(
    directories: list[str],
    options: ProcessOptions,
    logger: logging.Logger,
) -> tuple[list[str], list[str], list[str], int]:
    """Run layout generation per directory; return successes, skips, errors, file total."""
    successes: list[str] = []
    skipped: list[str] = []
    errors: list[str] = []
    total_files = 0

    for directory in directories:
        full_path = Path(directory).resolve()
        logger.info(f"Processing: {full_path}")
        logger.debug(f"  Resolved path: {full_path}")

        result = process_layout(full_path, options, logger=logger)
        if result.outcome is ProcessOutcome.SKIPPED_EXISTING:
            skipped.append(full_path.name)
            continue
        if not result.success:
            errors.append(f"Failed to process {directory}: {result.message}")
            continue

        total_files += result.file_count
        successes.append(full_path.name)
        logger.info(f"Generated layout.json for {full_path.name}")
        logger.info(f"  {result.file_count} files included")
        logger.info(f"  Total package size: {format_file_size(result.total_size)}")
        logger.info("")

    return successes, skipped, errors, total_files


def _log_summary(
    logger: logging.Logger,
    successes: list[str],
    skipped: list[str],
    errors: list[str],
    total_files: int,
) -> None:
    logger.info("=" * 50)
    if successes:
        logger.info(f"Successfully processed {len(successes)} package(s):")
        for name in successes:
            logger.info(f"  - {name}")
    if skipped:
        logger.info(f"Skipped {len(skipped)} package(s) with an existing layout.json:")
        for name in skipped:
            logger.info(f"  - {name}")
    if errors:
        logger.error(f"Failed to process {len(errors)} package(s):")
        for message in errors:
            logger.error(f"  - {message}")
    if total_files > 0:
        logger.info(f"Total files processed: {total_files}")


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and generate (or watch) package layouts.

    Exits with status 1 when any package failed or nothing was processed.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logger = setup_logging(debug=args.debug, quiet=args.quiet)

    check_manifest = config.load_check_manifest() if args.manifest_check is None else args.manifest_check
    debounce_ms = args.debounce_ms if args.debounce_ms is not None else config.load_debounce_ms()
    poll_interval_ms = args.poll_interval_ms if args.poll_interval_ms is not None else config.load_poll_interval_ms()
    if args.save_config:
        config.save_defaults(
            debounce_ms=debounce_ms,
            poll_interval_ms=poll_interval_ms,
            check_manifest=check_manifest,
        )

    options = ProcessOptions(
        force=args.force,
        quiet=args.quiet,
        debug=args.debug,
        check_manifest=check_manifest,
        skip_manifest_update=args.skip_manifest_update,
    )

    logger.info(PROG_NAME)
    logger.info("")

    if not args.directories:
        logger.error("No directories specified.")
        logger.error(f"Use {PROG_NAME} --help for usage information.")
        raise SystemExit(1)

    if args.watch:
        if len(args.directories) != 1:
            raise SystemExit("--watch accepts exactly one directory.")
        watch_layout(
            Path(args.directories[0]).resolve(),
            options,
            debounce_seconds=debounce_ms / 1000.0,
            poll_interval_seconds=poll_interval_ms / 1000.0,
            logger=logger,
        )
        return

    successes, skipped, errors, total_files = _process_directories(args.directories, options, logger)
    _log_summary(logger, successes, skipped, errors, total_files)

    if errors:
        raise SystemExit(1)
    if not successes and not skipped:
        logger.error("No packages were processed.")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
