# forage/core/exceptions.py
from typing import Optional


class ForageError(Exception):
    """Base class for all errors raised by forage."""


class ConfigurationError(ForageError):
    """Raised when a scan is started with an unusable configuration."""


class ForagerRequiredError(ConfigurationError):
    """Raised when a scan is started without a Forager callback."""
    def __init__(self):
        super().__init__("Forager is required")


class CacheError(ForageError):
    """Raised by file cache backends when a lookup or insert fails."""
    def __init__(self, file_path: str, message: str):
        self.file_path = file_path
        super().__init__(f"File cache failure for {file_path}: {message}")


class ScanCancelledError(ForageError):
    """Raised when a scan stops because its context was cancelled."""
    def __init__(self, reason: Optional[str] = None):
        self.reason = reason
        super().__init__(
            f"Scan cancelled: {reason}" if reason else "Scan cancelled"
        )
