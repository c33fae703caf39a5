"""Tests for infrastructure settings."""

from pathlib import Path
from unittest.mock import MagicMock

from src.domain.constants import DEFAULT_NEAR_THRESHOLD
from src.infrastructure import settings as settings_module
from src.infrastructure.settings import LedgerSettings

_ENV_VARS = (
    "LEDGER_BACKEND",
    "LEDGER_JSON_FILE",
    "LEDGER_CURRENCY",
    "BUDGET_NEAR_THRESHOLD",
)


def _clear_env(monkeypatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_from_env_defaults(monkeypatch, tmp_path: Path) -> None:
    """Defaults select SQLAlchemy, INR and the project data directory."""
    _clear_env(monkeypatch)
    monkeypatch.setattr(settings_module, "get_project_root", lambda: tmp_path)

    settings = LedgerSettings.from_env()

    assert settings.backend == "sqlalchemy"
    assert settings.json_file == tmp_path / "data" / "ledger.json"
    assert settings.currency_code == "INR"
    assert settings.near_threshold == DEFAULT_NEAR_THRESHOLD


def test_from_env_reads_values(monkeypatch, tmp_path: Path) -> None:
    _clear_env(monkeypatch)
    vault = tmp_path / "vault.json"
    monkeypatch.setenv("LEDGER_BACKEND", " JSON ")
    monkeypatch.setenv("LEDGER_JSON_FILE", str(vault))
    monkeypatch.setenv("LEDGER_CURRENCY", "eur")
    monkeypatch.setenv("BUDGET_NEAR_THRESHOLD", "90")

    settings = LedgerSettings.from_env()

    assert settings.backend == "json"
    assert settings.json_file == vault.resolve()
    assert settings.currency_code == "EUR"
    assert settings.near_threshold == 90


def test_from_env_accepts_file_uri(monkeypatch, tmp_path: Path) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("LEDGER_JSON_FILE", f"file://{tmp_path}/my%20vault.json")

    settings = LedgerSettings.from_env()

    assert settings.json_file == (tmp_path / "my vault.json").resolve()


def test_invalid_threshold_falls_back_to_default() -> None:
    logger = MagicMock()

    assert LedgerSettings._parse_threshold("abc", logger) == 80
    assert LedgerSettings._parse_threshold("150", logger) == 80
    assert LedgerSettings._parse_threshold(None, logger) == 80
    assert logger.warning.call_count == 2


def test_unknown_backend_is_kept_and_logged(monkeypatch) -> None:
    _clear_env(monkeypatch)
    fake_logger = MagicMock()
    monkeypatch.setattr(settings_module, "get_app_logger", lambda: fake_logger)
    monkeypatch.setenv("LEDGER_BACKEND", "mongo")

    settings = LedgerSettings.from_env()

    assert settings.backend == "mongo"
    fake_logger.warning.assert_called_once()
