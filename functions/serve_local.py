#!/usr/bin/env python3
"""Local development server for the Remoteness Scoring API.

Usage:
    cd functions
    source venv/bin/activate
    python serve_local.py

This will start a Flask server (default port 3000) that handles:
- GET  /health
- GET  /location-score?zip=...&month=...
- GET  /trip-score?pickup_zip=...&delivery_zip=...&month=...
- POST /reload-zips

Configuration comes from environment variables or a .env file
(LOCATION_DATASET_PATH, HOST, PORT, LOG_LEVEL, MONTH_TIMEZONE).
"""

from config.settings import settings
from main import create_app
from services.location_store import get_location_store
from utils.logging_config import configure_logging, log_server_start

ENDPOINTS = [
    "GET  /health",
    "GET  /location-score",
    "GET  /trip-score",
    "POST /reload-zips",
]


def main() -> None:
    configure_logging(settings.log_level)
    settings.validate()

    store = get_location_store()
    store.load_on_startup()

    app = create_app(store)
    log_server_start(settings.host, settings.port, store.size, ENDPOINTS)
    app.run(host=settings.host, port=settings.port, threaded=True)


if __name__ == '__main__':
    main()
