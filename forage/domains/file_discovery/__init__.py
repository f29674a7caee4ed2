"""
File Discovery Domain
Scan loop, per-file inactivity watchers and the dedup caches they rely on.
"""
from .domain_objects import (
    FileMetadata,
    Forager,
    ScanConfiguration,
    ScanPassResult,
    WatchState,
)
from .file_cache import (
    BoundedFileCache,
    ExpiringFileCache,
    FileCache,
    MemoryFileCache,
    create_file_cache,
)
from .file_scanner import FileScanner
from .inactivity_watcher import InactivityWatcher, get_file_metadata

__all__ = [
    "FileMetadata",
    "Forager",
    "ScanConfiguration",
    "ScanPassResult",
    "WatchState",
    "FileCache",
    "MemoryFileCache",
    "BoundedFileCache",
    "ExpiringFileCache",
    "create_file_cache",
    "FileScanner",
    "InactivityWatcher",
    "get_file_metadata",
]
