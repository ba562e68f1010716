"""Trip Aggregator.

A trip surcharge is the plain sum of its two independently scored
endpoints. No distance, route or pickup/delivery interaction terms.
"""

from typing import Optional

import structlog

from models.location_record import LocationRecord
from models.remoteness import SurchargeRange, TripScore
from services.remoteness_scoring import score_location

logger = structlog.get_logger(__name__)


def combine_surcharges(first: SurchargeRange, second: SurchargeRange) -> SurchargeRange:
    """Element-wise sum of two surcharge bands."""
    return first + second


def score_trip(
    pickup: Optional[LocationRecord],
    delivery: Optional[LocationRecord],
    month: int,
) -> TripScore:
    """Score both endpoints and combine their surcharges.

    Args:
        pickup: Pickup location record.
        delivery: Delivery location record.
        month: Normalized calendar month 1-12.

    Returns:
        TripScore with both endpoint results and the combined surcharge.
    """
    pickup_score = score_location(pickup, month)
    delivery_score = score_location(delivery, month)
    total = combine_surcharges(pickup_score.surcharge, delivery_score.surcharge)

    logger.debug(
        "trip_score_computed",
        pickup=pickup_score.location_id,
        delivery=delivery_score.location_id,
        month=month,
        total_min=total.min,
        total_max=total.max,
    )

    return TripScore(
        month=month,
        pickup=pickup_score,
        delivery=delivery_score,
        total_surcharge=total,
    )
