"""Utility modules for the Remoteness API."""

from utils.logging_config import (
    configure_logging,
    log_server_start,
)

__all__ = [
    "configure_logging",
    "log_server_start",
]
