import asyncio
import inspect
import logging
import time
from typing import Callable, Optional

import aiofiles.os

from forage.core.cancellation import ScanContext
from .domain_objects import FileMetadata, Forager, WatchState


async def get_file_metadata(file_path: str) -> Optional[FileMetadata]:
    """Get file size and modification time, or None if the file can't be stat'ed."""
    try:
        stat_result = await aiofiles.os.stat(file_path)
        return FileMetadata(
            path=file_path,
            size=stat_result.st_size,
            modified_at=stat_result.st_mtime,
        )
    except OSError:
        return None


def _is_coroutine_forager(forager: Forager) -> bool:
    return inspect.iscoroutinefunction(forager) or inspect.iscoroutinefunction(
        getattr(forager, "__call__", None)
    )


class InactivityWatcher:
    """
    Decides when a single file has stopped being written to.

    A file is settled once its modification time is more than
    ``file_inactivity_cutoff_seconds`` in the past. The watcher then invokes the
    Forager exactly once. A file that disappears, or a context that is
    cancelled, ends the watch without foraging.
    """

    def __init__(
        self,
        forager: Forager,
        file_inactivity_cutoff_seconds: float,
        poll_interval_seconds: float,
        clock: Callable[[], float] = time.time,
    ):
        self.forager = forager
        self.file_inactivity_cutoff_seconds = file_inactivity_cutoff_seconds
        self.poll_interval_seconds = poll_interval_seconds
        self._clock = clock

    async def watch(self, file_path: str, context: ScanContext) -> WatchState:
        metadata = await get_file_metadata(file_path)
        while True:
            if metadata is None:
                logging.debug(f"File disappeared before settling: {file_path}")
                return WatchState.GONE
            if context.cancelled():
                logging.debug(f"Watch cancelled for {file_path}")
                return WatchState.CANCELLED
            if metadata.age_seconds(self._clock()) > self.file_inactivity_cutoff_seconds:
                break
            await context.sleep(self.poll_interval_seconds)
            metadata = await get_file_metadata(file_path)

        logging.info(f"File settled: {file_path}")
        await self._forage(file_path, context)
        return WatchState.SETTLED

    async def _forage(self, file_path: str, context: ScanContext) -> None:
        try:
            if _is_coroutine_forager(self.forager):
                await self.forager(context, file_path)
            else:
                await asyncio.to_thread(self.forager, context, file_path)
        except Exception as e:
            logging.error(f"Forager failed for {file_path}: {e}")
