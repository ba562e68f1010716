"""Logging setup for the Remoteness API.

Configures structlog once per process and prints the startup banner
for the local server.
"""

import logging
from datetime import datetime, timezone
from typing import Iterable

import structlog

logger = structlog.get_logger()

BANNER_WIDTH = 64
BANNER_CHAR = "═"


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog with ISO timestamps and level filtering.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR).
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer()
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=False,
    )


def _create_banner(char: str, text: str, width: int = BANNER_WIDTH) -> str:
    """Create a centered banner with given character."""
    text_with_spaces = f" {text} "
    padding = (width - len(text_with_spaces)) // 2
    return char * padding + text_with_spaces + char * (width - padding - len(text_with_spaces))


def log_server_start(host: str, port: int, locations: int, endpoints: Iterable[str]) -> None:
    """Print the local server banner and log the start event."""
    timestamp = datetime.now(timezone.utc).isoformat()

    print("\n")
    print(BANNER_CHAR * BANNER_WIDTH)
    print(_create_banner(BANNER_CHAR, "REMOTENESS API - LOCAL SERVER"))
    print(BANNER_CHAR * BANNER_WIDTH)
    print(f"║ Listening : http://{host}:{port}")
    print(f"║ Timestamp : {timestamp}")
    print(f"║ Locations : {locations:,}")
    for endpoint in endpoints:
        print(f"║ • {endpoint}")
    print(BANNER_CHAR * BANNER_WIDTH)
    print("\n")

    logger.info("server_starting", host=host, port=port, locations=locations)
