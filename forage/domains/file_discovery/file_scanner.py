import asyncio
import logging
import os
import time
from typing import Callable, List, Optional, Set

import aiofiles.os

from forage.core.cancellation import ScanContext
from forage.core.exceptions import ForagerRequiredError
from .domain_objects import ScanConfiguration, ScanPassResult
from .file_cache import FileCache, MemoryFileCache
from .inactivity_watcher import InactivityWatcher


async def list_directory_entries(scan_directory: str) -> List[os.DirEntry]:
    """List the immediate entries of a directory. Listing errors propagate."""
    with await aiofiles.os.scandir(scan_directory) as entries:
        return list(entries)


class FileScanner:
    """
    Periodically scans one directory and starts a watcher for every new file.

    Each watcher runs as an independent task. The scan loop never waits for a
    watcher, so a slow file or a slow Forager never holds up discovery.
    """

    def __init__(
        self,
        config: ScanConfiguration,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config
        self._clock = clock
        self._watch_tasks: Set[asyncio.Task] = set()
        self.last_pass: Optional[ScanPassResult] = None

    @property
    def active_watch_count(self) -> int:
        return len(self._watch_tasks)

    async def scan_for_files(
        self, scan_directory: str, context: Optional[ScanContext] = None
    ) -> None:
        """
        Scan ``scan_directory`` until the context is cancelled.

        Every path the cache reports as unknown is added to the cache and then
        handed to its own watcher, which calls the Forager once the file settles.

        Raises:
            ForagerRequiredError: No Forager was configured.
            ScanCancelledError: The context was cancelled.
            OSError: The directory could not be listed.
            Exception: Whatever the cache raised on contains/add.
        """
        if self.config.forager is None:
            raise ForagerRequiredError()
        if context is None:
            context = ScanContext()

        cache = self.config.cache if self.config.cache is not None else MemoryFileCache()
        watcher = InactivityWatcher(
            forager=self.config.forager,
            file_inactivity_cutoff_seconds=self.config.effective_inactivity_cutoff,
            poll_interval_seconds=self.config.poll_interval_seconds,
            clock=self._clock,
        )

        logging.info(f"Scanning: {scan_directory}")
        logging.info(f"File inactivity cutoff: {watcher.file_inactivity_cutoff_seconds}s")
        logging.info(f"Scan interval: {self.config.scan_interval_seconds}s")

        while not context.cancelled():
            try:
                self.last_pass = await self._execute_scan_pass(
                    scan_directory, cache, watcher, context
                )
            except Exception as e:
                logging.error(f"Scan of {scan_directory} aborted: {e}")
                raise
            await context.sleep(self.config.scan_interval_seconds)

        logging.info(
            f"Scan of {scan_directory} stopped ({context.reason or 'cancelled'}), "
            f"{self.active_watch_count} watcher(s) still running"
        )
        raise context.error()

    async def _execute_scan_pass(
        self,
        scan_directory: str,
        cache: FileCache,
        watcher: InactivityWatcher,
        context: ScanContext,
    ) -> ScanPassResult:
        result = ScanPassResult()

        for entry in await list_directory_entries(scan_directory):
            result.entries_seen += 1
            if entry.is_dir():
                result.directories_skipped += 1
                continue

            file_path = os.path.join(scan_directory, entry.name)
            if await cache.contains(file_path):
                continue

            # Register before spawning so a later pass can never dispatch it twice
            await cache.add(file_path)
            self._start_watch(watcher, file_path, context)
            result.dispatched += 1

        if result.dispatched:
            logging.debug(
                f"Scan pass found {result.dispatched} new file(s) in {scan_directory}"
            )
        return result

    def _start_watch(
        self, watcher: InactivityWatcher, file_path: str, context: ScanContext
    ) -> None:
        logging.debug(f"New file discovered: {file_path}")
        task = asyncio.create_task(
            watcher.watch(file_path, context), name=f"watch:{file_path}"
        )
        self._watch_tasks.add(task)
        task.add_done_callback(self._watch_tasks.discard)

    async def wait_for_watchers(self) -> None:
        """Wait until every watcher started so far has finished."""
        while self._watch_tasks:
            await asyncio.gather(*list(self._watch_tasks), return_exceptions=True)
