"""
Configuration helpers for the store backend.

Exposes a frozen Settings object read from environment variables (data file
path, log format, bind address, CORS policy) so that routers/services do not
fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_DATA_FILE = PROJECT_ROOT / "data.json"
DEFAULT_CORS_ORIGIN_REGEX = r"^(http://localhost.*|null)$"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    data_file: Path
    atomic_writes: bool
    log_level: str
    log_format: str
    host: str
    port: int
    cors_origin_regex: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    app_env = (os.getenv("APP_ENV") or "dev").lower()
    data_file = (os.getenv("STORE_DATA_FILE") or "").strip()
    default_format = "json" if app_env == "prod" else "text"
    return Settings(
        app_env=app_env,
        data_file=Path(data_file) if data_file else DEFAULT_DATA_FILE,
        atomic_writes=_bool(os.getenv("STORE_ATOMIC_WRITES"), False),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        log_format=(os.getenv("LOG_FORMAT") or default_format).lower(),
        host=os.getenv("HOST", "127.0.0.1"),
        port=_int(os.getenv("PORT", "8000"), 8000),
        cors_origin_regex=os.getenv("CORS_ORIGIN_REGEX") or DEFAULT_CORS_ORIGIN_REGEX,
    )
