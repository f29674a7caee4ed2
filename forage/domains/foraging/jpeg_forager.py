"""
Sample Forager that reports files which look like JPEG images.

Reads only the first bytes of each settled file. Reads go through a counting
semaphore so that a burst of settled files can't exhaust open file handles.
"""
import asyncio
import logging
from typing import List

import aiofiles

from forage.core.cancellation import ScanContext

# First three bytes shared by all JPEG variants
JPEG_MAGIC = b"\xff\xd8\xff"


def is_jpeg_header(header: bytes) -> bool:
    return header[: len(JPEG_MAGIC)] == JPEG_MAGIC


class JpegForager:
    def __init__(self, max_concurrent_reads: int = 1):
        self._read_gate = asyncio.Semaphore(max_concurrent_reads)
        self.jpegs_found: List[str] = []

    async def read_header(self, file_path: str, size: int = len(JPEG_MAGIC)) -> bytes:
        async with self._read_gate:
            async with aiofiles.open(file_path, "rb") as f:
                return await f.read(size)

    async def __call__(self, context: ScanContext, file_path: str) -> None:
        if context.cancelled():
            return
        try:
            header = await self.read_header(file_path)
        except OSError as e:
            logging.debug(f"Can't read {file_path}: {e}")
            return

        if is_jpeg_header(header):
            self.jpegs_found.append(file_path)
            logging.info(f"{file_path} is probably a jpeg")
