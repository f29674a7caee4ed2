"""
forage - polling directory watcher that hands settled files to a callback.
"""
from .core.cancellation import ScanContext
from .core.exceptions import (
    CacheError,
    ConfigurationError,
    ForageError,
    ForagerRequiredError,
    ScanCancelledError,
)
from .domains.file_discovery import (
    BoundedFileCache,
    ExpiringFileCache,
    FileCache,
    FileScanner,
    MemoryFileCache,
    ScanConfiguration,
    WatchState,
)

__version__ = "0.1.0"

__all__ = [
    "ScanContext",
    "ForageError",
    "ConfigurationError",
    "ForagerRequiredError",
    "CacheError",
    "ScanCancelledError",
    "FileCache",
    "MemoryFileCache",
    "BoundedFileCache",
    "ExpiringFileCache",
    "FileScanner",
    "ScanConfiguration",
    "WatchState",
]
