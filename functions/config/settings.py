"""Remoteness API configuration settings.

Loads configuration from environment variables with sensible defaults.
A `.env` file in the working directory is picked up for local development.
"""

import os
from pathlib import Path
from typing import Optional
from dataclasses import dataclass, field
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

# Load .env file for local configuration (dataset path, port, log level, etc.)
load_dotenv()

DEFAULT_DATASET_PATH = Path(__file__).resolve().parent.parent / "data" / "zips.json"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class Settings:
    """Application settings loaded from environment variables.

    Note: `month_timezone` left unset keeps the historical behaviour of the
    current-month fallback, which follows the host's local time.
    """

    # Reference dataset
    location_dataset_path: str = field(
        default_factory=lambda: os.getenv("LOCATION_DATASET_PATH", str(DEFAULT_DATASET_PATH))
    )

    # HTTP server
    host: str = field(default_factory=lambda: os.getenv("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "3000")))
    cors_enabled: bool = field(default_factory=lambda: _env_flag("CORS_ENABLED", "true"))

    # Month fallback
    month_timezone: Optional[str] = field(default_factory=lambda: os.getenv("MONTH_TIMEZONE") or None)

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    @property
    def tzinfo(self) -> Optional[ZoneInfo]:
        """Zone used for the current-month fallback (None = system local time)."""
        if not self.month_timezone:
            return None
        return ZoneInfo(self.month_timezone)

    def validate(self) -> None:
        """Validate settings values.

        Raises:
            ValueError: If a setting is unusable.
        """
        if not 1 <= self.port <= 65535:
            raise ValueError(f"PORT must be between 1 and 65535, got {self.port}")
        if self.month_timezone:
            try:
                ZoneInfo(self.month_timezone)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise ValueError(f"Unknown MONTH_TIMEZONE: {self.month_timezone}") from e


# Singleton settings instance
settings = Settings()
