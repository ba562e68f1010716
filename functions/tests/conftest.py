"""Pytest configuration and shared fixtures for Remoteness API tests."""

import json
import os
import sys

import pytest


# ============================================================================
# Ensure local imports work (config/, models/, services/, validators/)
# ============================================================================
#
# Our codebase uses absolute imports like `from models...` / `from services...`.
# This guarantees that `functions/` is importable as the top-level module root.
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


from tests.fixtures.mock_location_data import (  # noqa: E402
    REMOTE_RAW,
    get_valid_records,
)


# ============================================================================
# Records
# ============================================================================

@pytest.fixture
def remote_record():
    """REMOTE_PREMIUM record from the worked example."""
    from models.location_record import LocationRecord

    return LocationRecord.model_validate(REMOTE_RAW)


@pytest.fixture
def make_record():
    """Factory for records with only the fields a test cares about."""
    from models.location_record import LocationRecord

    def _make(**overrides):
        data = {"location_id": "12345"}
        data.update(overrides)
        return LocationRecord(**data)

    return _make


# ============================================================================
# Store
# ============================================================================

@pytest.fixture
def dataset_file(tmp_path):
    """Dataset file holding the valid sample records."""
    path = tmp_path / "zips.json"
    path.write_text(json.dumps(get_valid_records()), encoding="utf-8")
    return path


@pytest.fixture
def location_store(dataset_file):
    """LocationStore loaded from the sample dataset file."""
    from services.location_store import LocationStore

    store = LocationStore(dataset_path=dataset_file)
    store.load_file()
    return store


# ============================================================================
# HTTP
# ============================================================================

@pytest.fixture
def app(location_store):
    """Flask app serving the sample store."""
    from main import create_app

    app = create_app(location_store)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()
