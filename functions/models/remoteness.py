"""Remoteness score Pydantic models.

Result types produced by the scoring engine and the trip aggregator,
plus the conversion to the API wire format.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


SURCHARGE_CURRENCY = "USD"
SURCHARGE_TYPE = "lump_sum"


# =============================================================================
# ENUMS
# =============================================================================


class RemotenessCategory(str, Enum):
    """Remoteness tier, ascending by total score."""

    URBAN_EASY = "URBAN_EASY"
    NORMAL = "NORMAL"
    RURAL_DIFFICULT = "RURAL_DIFFICULT"
    REMOTE_PREMIUM = "REMOTE_PREMIUM"


# =============================================================================
# SCORE COMPONENTS
# =============================================================================


class ScoreComponents(BaseModel):
    """Per-factor remoteness sub-scores.

    `total` is derived from the four components and is never stored.
    """

    model_config = ConfigDict(frozen=True)

    density: int = Field(0, ge=0, description="Population density score")
    metro_access: int = Field(0, ge=0, description="Metro and interstate access score")
    road_terrain: int = Field(0, ge=0, description="Terrain, island and winter score")
    carrier: int = Field(0, ge=0, description="Carrier scarcity score")

    @computed_field
    @property
    def total(self) -> int:
        return self.density + self.metro_access + self.road_terrain + self.carrier

    def to_response(self) -> Dict[str, int]:
        return {
            "densityScore": self.density,
            "metroAccessScore": self.metro_access,
            "roadTerrainScore": self.road_terrain,
            "carrierScore": self.carrier,
            "totalScore": self.total,
        }


# =============================================================================
# SURCHARGE RANGE
# =============================================================================


class SurchargeRange(BaseModel):
    """Flat lump-sum surcharge band."""

    model_config = ConfigDict(frozen=True)

    currency: str = Field(default=SURCHARGE_CURRENCY, description="ISO currency code")
    type: str = Field(default=SURCHARGE_TYPE, description="Band type")
    min: float = Field(..., ge=0, description="Lower bound")
    max: float = Field(..., ge=0, description="Upper bound")

    @model_validator(mode="after")
    def validate_order(self) -> "SurchargeRange":
        """Ensure min <= max."""
        if self.min > self.max:
            raise ValueError(
                f"Surcharge range must be min <= max, got: min={self.min}, max={self.max}"
            )
        return self

    @classmethod
    def zero(cls) -> "SurchargeRange":
        """Create a zero surcharge range."""
        return cls(min=0, max=0)

    def __add__(self, other: "SurchargeRange") -> "SurchargeRange":
        """Add two surcharge ranges."""
        if self.currency != other.currency:
            raise ValueError(
                f"Cannot add surcharges in {self.currency} and {other.currency}"
            )
        return SurchargeRange(
            currency=self.currency,
            type=self.type,
            min=self.min + other.min,
            max=self.max + other.max,
        )

    def to_response(self) -> Dict[str, Any]:
        return {
            "currency": self.currency,
            "type": self.type,
            "min": _plain_number(self.min),
            "max": _plain_number(self.max),
        }


def _plain_number(value: float):
    """Render whole amounts as ints (25 rather than 25.0)."""
    return int(value) if float(value).is_integer() else value


# =============================================================================
# RESULTS
# =============================================================================


class LocationScore(BaseModel):
    """Scored location: identifier, display fields and the computed result."""

    model_config = ConfigDict(frozen=True)

    location_id: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    month: int = Field(..., ge=1, le=12)
    components: ScoreComponents
    category: RemotenessCategory
    surcharge: SurchargeRange

    def to_response(self, include_month: bool = True) -> Dict[str, Any]:
        """Convert to the API response shape.

        Args:
            include_month: Trip endpoints report the month once at the top
                level, so endpoint entries omit it.
        """
        data: Dict[str, Any] = {
            "zip": self.location_id,
            "city": self.city,
            "state": self.region,
        }
        if include_month:
            data["month"] = self.month
        data.update({
            "components": self.components.to_response(),
            "category": self.category.value,
            "suggested_surcharge": self.surcharge.to_response(),
        })
        return data


class TripScore(BaseModel):
    """Pickup and delivery scores plus the combined trip surcharge."""

    model_config = ConfigDict(frozen=True)

    month: int = Field(..., ge=1, le=12)
    pickup: LocationScore
    delivery: LocationScore
    total_surcharge: SurchargeRange

    def to_response(self) -> Dict[str, Any]:
        return {
            "month": self.month,
            "pickup": self.pickup.to_response(include_month=False),
            "delivery": self.delivery.to_response(include_month=False),
            "total_suggested_surcharge": self.total_surcharge.to_response(),
        }
