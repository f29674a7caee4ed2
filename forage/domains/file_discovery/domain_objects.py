"""
File Discovery Domain Objects
Configuration and value objects used by the scan loop and its watchers.
"""
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Awaitable, Callable, Optional, Union

from forage.core.cancellation import ScanContext
from forage.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from forage.config import Settings
    from .file_cache import FileCache


DEFAULT_FILE_INACTIVITY_CUTOFF_SECONDS = 5.0
DEFAULT_SCAN_INTERVAL_SECONDS = 1.0
DEFAULT_POLL_INTERVAL_SECONDS = 1.0

# A Forager receives the scan context and the full path of a settled file.
# Coroutine functions are awaited, plain callables run in a worker thread.
Forager = Callable[[ScanContext, str], Union[Awaitable[None], None]]


class WatchState(str, Enum):
    POLLING = "Polling"
    SETTLED = "Settled"
    GONE = "Gone"
    CANCELLED = "Cancelled"


@dataclass(frozen=True)
class FileMetadata:
    path: str
    size: int
    modified_at: float  # epoch seconds, as reported by stat

    def age_seconds(self, now: float) -> float:
        return now - self.modified_at


@dataclass(frozen=True)
class ScanConfiguration:
    """Configuration object held by the scan loop for its entire run."""

    forager: Optional[Forager]
    cache: Optional["FileCache"] = None
    file_inactivity_cutoff_seconds: float = DEFAULT_FILE_INACTIVITY_CUTOFF_SECONDS
    scan_interval_seconds: float = DEFAULT_SCAN_INTERVAL_SECONDS
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS

    def __post_init__(self):
        if self.scan_interval_seconds <= 0:
            raise ConfigurationError(
                f"scan_interval_seconds must be positive, got {self.scan_interval_seconds}"
            )
        if self.poll_interval_seconds <= 0:
            raise ConfigurationError(
                f"poll_interval_seconds must be positive, got {self.poll_interval_seconds}"
            )

    @property
    def effective_inactivity_cutoff(self) -> float:
        # Non-positive cutoffs fall back to the default
        if self.file_inactivity_cutoff_seconds <= 0:
            return DEFAULT_FILE_INACTIVITY_CUTOFF_SECONDS
        return self.file_inactivity_cutoff_seconds

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        forager: Optional[Forager],
        cache: Optional["FileCache"] = None,
    ) -> "ScanConfiguration":
        return cls(
            forager=forager,
            cache=cache,
            file_inactivity_cutoff_seconds=settings.file_inactivity_cutoff_seconds,
            scan_interval_seconds=settings.scan_interval_seconds,
            poll_interval_seconds=settings.poll_interval_seconds,
        )


@dataclass
class ScanPassResult:
    """Counters for one directory listing plus dedup/dispatch cycle."""

    entries_seen: int = 0
    directories_skipped: int = 0
    dispatched: int = 0
