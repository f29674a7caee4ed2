#!/usr/bin/env python3
"""
forage - report JPEG files as they finish arriving in a directory.

Usage:
    python -m forage /path/to/dir [--cutoff 5] [--scan-interval 1] ...
"""
import argparse
import asyncio
import logging
import signal
import sys
from typing import List, Optional

from pydantic import ValidationError

from .config import Settings
from .core.cancellation import ScanContext
from .core.exceptions import ScanCancelledError
from .domains.file_discovery import FileScanner, ScanConfiguration, create_file_cache
from .domains.foraging import JpegForager
from .logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="forage",
        description="Watch a directory and report files that look like JPEGs once they stop changing",
    )
    parser.add_argument("directory", nargs="?", help="Directory to scan (default: FORAGE_SCAN_DIRECTORY)")
    parser.add_argument("--cutoff", type=float, dest="file_inactivity_cutoff_seconds",
                        help="Seconds a file must stay unmodified before it is foraged")
    parser.add_argument("--scan-interval", type=float, dest="scan_interval_seconds",
                        help="Seconds between directory scans")
    parser.add_argument("--poll-interval", type=float, dest="poll_interval_seconds",
                        help="Seconds between modification time checks per file")
    parser.add_argument("--cache", choices=["memory", "bounded", "expiring"], dest="cache_backend",
                        help="Dedup cache backend")
    parser.add_argument("--max-concurrent-reads", type=int, dest="max_concurrent_reads",
                        help="Files the JPEG forager may read at once")
    parser.add_argument("--log-level", dest="log_level",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Log level")
    parser.add_argument("--log-file", dest="log_file_path", help="Log file path")
    parser.add_argument("--run-for", type=float, default=None,
                        help="Stop scanning after this many seconds (default: run until interrupted)")
    return parser


def _install_signal_handlers(context: ScanContext) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, context.cancel, f"received {sig.name}")
        except NotImplementedError:
            # add_signal_handler is unavailable on Windows event loops
            pass


async def run_scanner(
    settings: Settings, scan_directory: str, run_for: Optional[float] = None
) -> int:
    context = ScanContext()
    _install_signal_handlers(context)
    if run_for is not None:
        context.cancel_after(run_for)

    forager = JpegForager(max_concurrent_reads=settings.max_concurrent_reads)
    scanner = FileScanner(
        ScanConfiguration.from_settings(settings, forager, create_file_cache(settings))
    )

    try:
        await scanner.scan_for_files(scan_directory, context)
    except ScanCancelledError as e:
        logging.info(f"{e} - waiting for {scanner.active_watch_count} watcher(s)")
        await scanner.wait_for_watchers()
        logging.info(f"Found {len(forager.jpegs_found)} jpeg(s)")
        return 0
    except Exception as e:
        logging.error(f"Scanning {scan_directory} failed: {e}")
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = {
        key: value
        for key, value in vars(args).items()
        if key not in ("directory", "run_for") and value is not None
    }
    if args.directory:
        overrides["scan_directory"] = args.directory

    try:
        settings = Settings(**overrides)
    except ValidationError as e:
        parser.error(str(e))

    if not settings.scan_directory:
        parser.error("a directory is required (argument or FORAGE_SCAN_DIRECTORY)")

    setup_logging(settings)
    return asyncio.run(run_scanner(settings, settings.scan_directory, args.run_for))


if __name__ == "__main__":
    sys.exit(main())
