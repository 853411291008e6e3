import logging
from datetime import tzinfo
from functools import lru_cache
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Client Order Ledger API"
    app_version: str = "1.0.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:3020"]

    # Durable store: "sqlite" (SQLAlchemy table) or "directory" (one file per entry)
    storage_backend: str = "sqlite"
    database_url: str = "sqlite:///data/ledger.db"
    data_dir: str = "data"
    # Ceiling on the total bytes held by the durable store (5 MiB)
    storage_quota_bytes: int = 5 * 1024 * 1024

    # Calendar days for the dashboard; empty means process local time
    ledger_timezone: str = ""

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_storage: str = "INFO"          # durable store adapters and gateway

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def dashboard_timezone(self) -> tzinfo | None:
        """Resolve ``ledger_timezone``; unknown names fall back to local time."""
        name = self.ledger_timezone.strip()
        if not name:
            return None
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            _config_logger.warning("Unknown ledger timezone %r, using local time: %s", name, exc)
            return None


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
