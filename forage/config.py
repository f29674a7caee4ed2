from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Directory to scan (the command line argument takes precedence)
    scan_directory: Optional[str] = None

    # Timing configuration
    file_inactivity_cutoff_seconds: float = Field(default=5.0, gt=0)
    scan_interval_seconds: float = Field(default=1.0, gt=0)
    poll_interval_seconds: float = Field(default=1.0, gt=0)

    # Dedup cache: "memory", "bounded" or "expiring"
    cache_backend: Literal["memory", "bounded", "expiring"] = "memory"
    cache_max_entries: int = Field(default=100_000, gt=0)
    cache_ttl_seconds: float = Field(default=3600.0, gt=0)

    # Sample forager: concurrent file reads allowed
    max_concurrent_reads: int = Field(default=1, gt=0)

    # Logging configuration
    log_level: str = "INFO"
    log_file_path: str = "logs/forage.log"
    log_retention_days: int = 30

    model_config = SettingsConfigDict(
        env_file="settings.env", env_prefix="FORAGE_", extra="ignore"
    )

    @property
    def log_directory(self) -> Path:
        return Path(self.log_file_path).parent
