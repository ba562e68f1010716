"""Remoteness API configuration.

This package contains:
- settings: Environment variables and configuration
- errors: Custom exceptions and error codes
"""

from config.settings import settings
from config.errors import (
    RemotenessError,
    ErrorCode,
    ValidationError,
    LocationNotFoundError,
    DatasetLoadError,
)

__all__ = [
    "settings",
    "RemotenessError",
    "ErrorCode",
    "ValidationError",
    "LocationNotFoundError",
    "DatasetLoadError",
]
