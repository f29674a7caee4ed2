"""
Cooperative cancellation signal shared by the scan loop and its watchers.
"""
import asyncio
import logging
from typing import Optional

from .exceptions import ScanCancelledError


class ScanContext:
    """
    A cancellation signal that is set once and observed cooperatively.

    The scan loop and every inactivity watcher receive the same context. They
    check ``cancelled()`` at their poll boundaries and sleep through
    ``sleep()``, which returns early as soon as the context is cancelled.
    """

    def __init__(self) -> None:
        self._cancelled = asyncio.Event()
        self._reason: Optional[str] = None
        self._deadline_handle: Optional[asyncio.TimerHandle] = None

    def cancel(self, reason: Optional[str] = None) -> None:
        if self._cancelled.is_set():
            return
        self._reason = reason
        self._cancelled.set()
        if self._deadline_handle is not None:
            self._deadline_handle.cancel()
            self._deadline_handle = None
        logging.debug(f"Scan context cancelled ({reason or 'no reason given'})")

    def cancel_after(self, delay_seconds: float) -> None:
        """Cancel the context once ``delay_seconds`` have passed."""
        loop = asyncio.get_running_loop()
        if self._deadline_handle is not None:
            self._deadline_handle.cancel()
        self._deadline_handle = loop.call_later(
            delay_seconds, self.cancel, "deadline exceeded"
        )

    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def error(self) -> Optional[ScanCancelledError]:
        """Return the cancellation error, or None while the context is live."""
        if not self._cancelled.is_set():
            return None
        return ScanCancelledError(self._reason)

    async def wait(self) -> None:
        await self._cancelled.wait()

    async def sleep(self, seconds: float) -> bool:
        """
        Sleep for ``seconds`` unless the context is cancelled first.

        Returns:
            True if the context was cancelled before or during the sleep.
        """
        if self._cancelled.is_set():
            return True
        try:
            await asyncio.wait_for(self._cancelled.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return False
        return True
