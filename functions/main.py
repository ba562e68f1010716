"""HTTP entry points for the Remoteness Scoring API.

Provides HTTP endpoints for:
- Health check
- Scoring a single ZIP code
- Scoring a trip (pickup + delivery)
- Reloading the reference dataset without a restart
"""

import json
from typing import Any, Dict, List, Optional

import structlog
from flask import Flask, Response, current_app, request
from flask_cors import CORS

from config.settings import settings
from config.errors import (
    RemotenessError,
    ErrorCode,
    ValidationError,
    LocationNotFoundError,
    DatasetLoadError,
)
from services.location_store import LocationStore, get_location_store
from services.remoteness_scoring import score_location
from services.trip_aggregator import score_trip
from validators.request_validator import (
    normalize_month,
    require_location_id,
    require_location_ids,
)

logger = structlog.get_logger()

SERVICE_NAME = "remoteness-api"

# ============================================================================
# Helper Functions
# ============================================================================


def success_response(data: Dict[str, Any]) -> Dict[str, Any]:
    """Build success response."""
    return {"success": True, "data": data}


def error_response(code: str, message: str, details: Dict[str, Any] = None) -> Dict[str, Any]:
    """Build error response."""
    return {
        "success": False,
        "error": {
            "code": code,
            "message": message,
            "details": details or {}
        }
    }


def _json_response(data: dict, status: int = 200) -> Response:
    """Return JSON response."""
    return Response(
        json.dumps(data, default=str),
        status=status,
        mimetype="application/json"
    )


def _error_json(error: RemotenessError, status: int, **extra_details: Any) -> Response:
    body = error.to_dict()
    body["details"] = {**body["details"], **extra_details}
    return _json_response({"success": False, "error": body}, status=status)


def _store() -> LocationStore:
    return current_app.config["LOCATION_STORE"]


def _request_month() -> int:
    return normalize_month(request.args.get("month"), tz=settings.tzinfo)


# ============================================================================
# Endpoints
# ============================================================================


def health() -> Response:
    """Simple health check."""
    return _json_response({
        "status": "ok",
        "service": SERVICE_NAME,
        "locations": _store().size
    })


def location_score() -> Response:
    """Score a single ZIP.

    Query parameters:
        zip: Postal code (required)
        month: 1-12 (optional, defaults to the current month)

    Response:
    {
        "success": true,
        "data": {
            "zip": "59001", "city": "...", "state": "MT", "month": 1,
            "components": {"densityScore": 2, ..., "totalScore": 9},
            "category": "REMOTE_PREMIUM",
            "suggested_surcharge": {"currency": "USD", "type": "lump_sum", "min": 150, "max": 300}
        }
    }
    """
    try:
        location_id = require_location_id(request.args, "zip")
        month = _request_month()
        record = _store().lookup(location_id)

        result = score_location(record, month)

        logger.info(
            "location_score_request",
            location_id=location_id,
            month=month,
            category=result.category.value
        )
        return _json_response(success_response(result.to_response()))

    except ValidationError as e:
        return _error_json(e, 400)
    except LocationNotFoundError as e:
        logger.info("location_not_found", location_id=e.location_id)
        return _error_json(e, 404)
    except RemotenessError as e:
        logger.error("location_score_error", error=e.message, code=e.code)
        return _error_json(e, 500)
    except Exception as e:
        logger.exception("location_score_exception", error=str(e))
        return _json_response(
            error_response(ErrorCode.INTERNAL_ERROR, f"Failed to score location: {str(e)}"),
            status=500
        )


def trip_score() -> Response:
    """Score a trip (pickup + delivery).

    Query parameters:
        pickup_zip: Pickup postal code (required)
        delivery_zip: Delivery postal code (required)
        month: 1-12 (optional, defaults to the current month)

    Both endpoints are resolved before failing, so a 404 lists every
    missing ZIP in `details.missing`.
    """
    try:
        pickup_id, delivery_id = require_location_ids(request.args, "pickup_zip", "delivery_zip")
        month = _request_month()

        store = _store()
        endpoints = [("pickup", pickup_id), ("delivery", delivery_id)]
        records = {role: store.get(location_id) for role, location_id in endpoints}
        missing: List[Dict[str, Optional[str]]] = [
            {"role": role, "location_id": location_id}
            for role, location_id in endpoints
            if records[role] is None
        ]
        if missing:
            first = missing[0]
            raise LocationNotFoundError(
                first["location_id"],
                role=first["role"],
                details={"missing": missing}
            )

        result = score_trip(records["pickup"], records["delivery"], month)

        logger.info(
            "trip_score_request",
            pickup=pickup_id,
            delivery=delivery_id,
            month=month,
            total_min=result.total_surcharge.min,
            total_max=result.total_surcharge.max
        )
        return _json_response(success_response(result.to_response()))

    except ValidationError as e:
        return _error_json(e, 400)
    except LocationNotFoundError as e:
        logger.info("trip_location_not_found", missing=e.details.get("missing"))
        return _error_json(e, 404)
    except RemotenessError as e:
        logger.error("trip_score_error", error=e.message, code=e.code)
        return _error_json(e, 500)
    except Exception as e:
        logger.exception("trip_score_exception", error=str(e))
        return _json_response(
            error_response(ErrorCode.INTERNAL_ERROR, f"Failed to score trip: {str(e)}"),
            status=500
        )


def reload_locations() -> Response:
    """Reload the reference dataset without restarting.

    Loads fully before responding. On failure the previous dataset stays
    active and the error is returned.
    """
    try:
        total = _store().reload()
        return _json_response(success_response({"status": "reloaded", "total_zips": total}))
    except DatasetLoadError as e:
        return _error_json(e, 500, total_zips=_store().size)
    except Exception as e:
        logger.exception("reload_locations_exception", error=str(e))
        return _json_response(
            error_response(
                ErrorCode.INTERNAL_ERROR,
                f"Failed to reload location dataset: {str(e)}",
                {"total_zips": _store().size}
            ),
            status=500
        )


# ============================================================================
# App Factory
# ============================================================================


def create_app(store: Optional[LocationStore] = None) -> Flask:
    """Build the Flask application.

    Args:
        store: Location store to serve from. Defaults to the process-wide
            store; it is not loaded here (see serve_local.py).
    """
    app = Flask(__name__)
    app.config["LOCATION_STORE"] = store or get_location_store()

    if settings.cors_enabled:
        CORS(app)

    app.add_url_rule("/health", "health", health, methods=["GET"])
    app.add_url_rule("/location-score", "location_score", location_score, methods=["GET"])
    app.add_url_rule("/trip-score", "trip_score", trip_score, methods=["GET"])
    app.add_url_rule("/reload-zips", "reload_zips", reload_locations, methods=["POST"])
    app.add_url_rule("/reload-locations", "reload_locations", reload_locations, methods=["POST"])

    return app
