"""
Configuration helpers for the employees backend.

Routers/services never read os.environ directly; they receive a Settings
instance built here (bind address, data file location, logging knobs).
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

DEFAULT_DATA_FILE = Path("data") / "employees.json"
REQUEST_LOG_FORMATS = {"tiny", "short"}


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    host: str
    port: int
    data_file: Path
    log_level: str
    request_log_format: str
    request_log_threshold: int


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str | None, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    log_format = (os.getenv("REQUEST_LOG_FORMAT") or "tiny").strip().lower()
    if log_format not in REQUEST_LOG_FORMATS:
        log_format = "tiny"

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        host=os.getenv("HOST", "127.0.0.1"),
        port=_int(os.getenv("PORT", "3000"), 3000),
        data_file=Path(os.getenv("DATA_FILE") or DEFAULT_DATA_FILE),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        request_log_format=log_format,
        request_log_threshold=_int(os.getenv("REQUEST_LOG_THRESHOLD", "400"), 400),
    )
