"""Remoteness Scoring Engine.

Maps a location record and a calendar month to score components, a
remoteness category and a suggested surcharge band. Every function here is
pure: no I/O, no caching, no shared state.

Scoring rules
-------------
    density        < 150 people/sq mi -> +2, < 500 -> +1, otherwise 0
    metro_access   > 90 min to a 100k city -> +2, > 60 -> +1
                   > 30 min to an interstate -> +1 (additive)
    road_terrain   mountainous +1, island +1,
                   winter risk during Nov-Mar +1
    carrier        scarcity > 0.7 -> +2, > 0.4 -> +1

Categories on the total: <=2 URBAN_EASY, <=4 NORMAL, <=6 RURAL_DIFFICULT,
otherwise REMOTE_PREMIUM.
"""

from typing import Dict, FrozenSet, Optional

import structlog

from models.location_record import LocationRecord
from models.remoteness import (
    LocationScore,
    RemotenessCategory,
    ScoreComponents,
    SurchargeRange,
)

logger = structlog.get_logger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Winter window wraps the year boundary (Nov-Mar)
WINTER_MONTHS: FrozenSet[int] = frozenset({11, 12, 1, 2, 3})

# Upper bound (inclusive) of total score for each category, ascending
CATEGORY_THRESHOLDS = (
    (2, RemotenessCategory.URBAN_EASY),
    (4, RemotenessCategory.NORMAL),
    (6, RemotenessCategory.RURAL_DIFFICULT),
)

SURCHARGE_TABLE: Dict[RemotenessCategory, SurchargeRange] = {
    RemotenessCategory.URBAN_EASY: SurchargeRange.zero(),
    RemotenessCategory.NORMAL: SurchargeRange(min=25, max=50),
    RemotenessCategory.RURAL_DIFFICULT: SurchargeRange(min=75, max=150),
    RemotenessCategory.REMOTE_PREMIUM: SurchargeRange(min=150, max=300),
}


# =============================================================================
# COMPONENT SCORES
# =============================================================================


def density_score(population_density: Optional[float]) -> int:
    """Score sparse population; unknown density scores 0."""
    if population_density is None:
        return 0
    if population_density < 150:
        return 2
    if population_density < 500:
        return 1
    return 0


def metro_access_score(
    drive_time_to_city_100k: Optional[float],
    drive_time_to_interstate: Optional[float],
) -> int:
    """Score distance from a large city plus distance from an interstate."""
    score = 0
    if drive_time_to_city_100k is not None:
        if drive_time_to_city_100k > 90:
            score += 2
        elif drive_time_to_city_100k > 60:
            score += 1
    if drive_time_to_interstate is not None and drive_time_to_interstate > 30:
        score += 1
    return score


def is_winter_month(month: int) -> bool:
    return month in WINTER_MONTHS


def road_terrain_score(
    is_mountainous: bool,
    is_island: bool,
    has_winter_risk: bool,
    month: int,
) -> int:
    """Score terrain and geography, plus the seasonal winter penalty."""
    score = 0
    if is_mountainous:
        score += 1
    if is_island:
        score += 1
    if has_winter_risk and is_winter_month(month):
        score += 1
    return score


def carrier_score(carrier_scarcity_index: float) -> int:
    """Score how hard it is to find a carrier for the lane."""
    if carrier_scarcity_index > 0.7:
        return 2
    if carrier_scarcity_index > 0.4:
        return 1
    return 0


def compute_components(record: Optional[LocationRecord], month: int) -> ScoreComponents:
    """Compute all four component scores for a record.

    A missing record yields all-zero components.

    Args:
        record: Location record, or None.
        month: Calendar month 1-12.

    Returns:
        ScoreComponents (total derived from the four components).
    """
    if record is None:
        return ScoreComponents()

    return ScoreComponents(
        density=density_score(record.population_density),
        metro_access=metro_access_score(
            record.drive_time_to_city_100k_minutes,
            record.drive_time_to_interstate_minutes,
        ),
        road_terrain=road_terrain_score(
            record.is_mountainous,
            record.is_island,
            record.has_winter_risk,
            month,
        ),
        carrier=carrier_score(record.carrier_scarcity_index),
    )


# =============================================================================
# CATEGORY AND SURCHARGE
# =============================================================================


def categorize_score(total_score: int) -> RemotenessCategory:
    """Map a total score to its category (boundaries belong to the lower tier)."""
    for upper_bound, category in CATEGORY_THRESHOLDS:
        if total_score <= upper_bound:
            return category
    return RemotenessCategory.REMOTE_PREMIUM


def suggested_surcharge(category: RemotenessCategory) -> SurchargeRange:
    """Look up the surcharge band for a category."""
    return SURCHARGE_TABLE[category]


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================


def score_location(record: Optional[LocationRecord], month: int) -> LocationScore:
    """Score a location for a given month.

    Args:
        record: Resolved location record. None is allowed and produces the
            zero result (lowest tier, zero surcharge).
        month: Normalized calendar month 1-12.

    Returns:
        LocationScore with components, category and surcharge.
    """
    components = compute_components(record, month)
    category = categorize_score(components.total)
    surcharge = suggested_surcharge(category)

    logger.debug(
        "location_score_computed",
        location_id=record.location_id if record else None,
        month=month,
        total_score=components.total,
        category=category.value,
    )

    return LocationScore(
        location_id=record.location_id if record else None,
        city=record.city if record else None,
        region=record.region if record else None,
        month=month,
        components=components,
        category=category,
        surcharge=surcharge,
    )
