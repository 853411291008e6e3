"""Unit tests for application settings configuration."""

from pathlib import Path
from zoneinfo import ZoneInfo

from ledger.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_storage_defaults():
    settings = Settings(_env_file=None)
    assert settings.storage_backend == "sqlite"
    assert settings.storage_quota_bytes == 5 * 1024 * 1024


def test_dashboard_timezone_resolution():
    assert Settings(_env_file=None, ledger_timezone="").dashboard_timezone() is None
    assert Settings(_env_file=None, ledger_timezone="Not/AZone").dashboard_timezone() is None
    assert Settings(_env_file=None, ledger_timezone="UTC").dashboard_timezone() == ZoneInfo("UTC")
