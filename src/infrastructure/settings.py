"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path
from urllib.parse import unquote, urlparse

from src.domain.constants import DEFAULT_NEAR_THRESHOLD
from src.infrastructure.logging.logger import get_app_logger
from src.utils.utils import get_project_root

SUPPORTED_BACKENDS = ("sqlalchemy", "json")


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for selecting and presenting the ledger store.

    Attributes:
        backend: Backend identifier (sqlalchemy or json).
        json_file: Path to the JSON vault used by the json backend.
        currency_code: Currency used when formatting amounts.
        near_threshold: Percent of a budget from which it is flagged NEAR.
    """

    backend: str = "sqlalchemy"
    json_file: Path | None = None
    currency_code: str = "INR"
    near_threshold: int = DEFAULT_NEAR_THRESHOLD

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        backend = os.getenv("LEDGER_BACKEND", "sqlalchemy").strip().lower()
        if backend not in SUPPORTED_BACKENDS:
            logger.warning(
                f"Unknown LEDGER_BACKEND '{backend}'. "
                f"Expected one of {', '.join(SUPPORTED_BACKENDS)}."
            )
        raw_json = os.getenv("LEDGER_JSON_FILE")
        if raw_json:
            json_file = cls._normalize_path(raw_json)
        else:
            json_file = cls._default_json_file()
        currency_code = (
            os.getenv("LEDGER_CURRENCY", "INR").strip().upper() or "INR"
        )
        near_threshold = cls._parse_threshold(
            os.getenv("BUDGET_NEAR_THRESHOLD"),
            logger=logger,
        )
        return cls(
            backend=backend,
            json_file=json_file,
            currency_code=currency_code,
            near_threshold=near_threshold,
        )

    @staticmethod
    def _normalize_path(raw_path: str) -> Path:
        """Normalize a JSON vault path or ``file://`` URI.

        Args:
            raw_path: Raw file path string.

        Returns:
            Path: Absolute filesystem path.
        """
        parsed = urlparse(raw_path)
        if parsed.scheme == "file":
            raw_path = unquote(parsed.path)
        return Path(raw_path).expanduser().resolve()

    @staticmethod
    def _default_json_file() -> Path:
        return get_project_root() / "data" / "ledger.json"

    @staticmethod
    def _parse_threshold(raw_value: str | None, logger) -> int:
        """Parse the NEAR threshold, falling back to the default.

        Args:
            raw_value: Raw environment value.
            logger: Logger used for warnings.

        Returns:
            int: Threshold between 0 and 100.
        """
        if not raw_value:
            return DEFAULT_NEAR_THRESHOLD
        try:
            value = int(raw_value)
        except ValueError:
            logger.warning(
                f"Invalid BUDGET_NEAR_THRESHOLD '{raw_value}'. "
                f"Using {DEFAULT_NEAR_THRESHOLD}."
            )
            return DEFAULT_NEAR_THRESHOLD
        if not 0 <= value <= 100:
            logger.warning(
                f"BUDGET_NEAR_THRESHOLD {value} outside 0-100. "
                f"Using {DEFAULT_NEAR_THRESHOLD}."
            )
            return DEFAULT_NEAR_THRESHOLD
        return value


__all__ = ["LedgerSettings", "SUPPORTED_BACKENDS"]
