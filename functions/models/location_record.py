"""Location reference record model.

One record per postal code, loaded from the reference dataset and held
read-only in the location store. Field names of the dataset file
(`zip`, `state`, `drive_time_city_100k_min`, ...) are accepted as aliases.
"""

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def canonical_location_id(value: Any) -> str:
    """Canonical string form of a postal code.

    - surrounding whitespace is dropped
    - a ZIP+4 (``12345-6789``) reduces to its 5-digit part
    - an all-digit value shorter than 5 digits is zero-padded, restoring the
      leading zeros lost when ZIPs are stored as JSON numbers
    """
    text = str(value).strip()
    head, sep, tail = text.partition("-")
    if sep and len(head) == 5 and head.isdigit() and tail.isdigit():
        text = head
    if text.isdigit() and len(text) < 5:
        text = text.zfill(5)
    return text


class LocationRecord(BaseModel):
    """Static geographic/demographic attributes for one postal code."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    # Identification
    location_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("zip", "locationId", "location_id"),
        description="Canonical postal code",
    )
    city: Optional[str] = Field(None, description="City name")
    region: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("state", "region"),
        description="State / region",
    )

    # Demographics and access
    population_density: Optional[float] = Field(
        None,
        ge=0,
        validation_alias=AliasChoices("population_density", "populationDensity"),
        description="People per square mile",
    )
    drive_time_to_city_100k_minutes: Optional[float] = Field(
        None,
        ge=0,
        validation_alias=AliasChoices(
            "drive_time_city_100k_min",
            "driveTimeToCity100kMinutes",
            "drive_time_to_city_100k_minutes",
        ),
        description="Drive time to the nearest 100k+ city (minutes)",
    )
    drive_time_to_interstate_minutes: Optional[float] = Field(
        None,
        ge=0,
        validation_alias=AliasChoices(
            "drive_time_interstate_min",
            "driveTimeToInterstateMinutes",
            "drive_time_to_interstate_minutes",
        ),
        description="Drive time to the nearest interstate (minutes)",
    )

    # Terrain
    is_mountainous: bool = Field(
        False, validation_alias=AliasChoices("is_mountain", "isMountainous", "is_mountainous")
    )
    is_island: bool = Field(False, validation_alias=AliasChoices("is_island", "isIsland"))
    has_winter_risk: bool = Field(
        False, validation_alias=AliasChoices("winter_risk", "hasWinterRisk", "has_winter_risk")
    )

    # Carrier coverage (nominally 0-1)
    carrier_scarcity_index: float = Field(
        0.0,
        validation_alias=AliasChoices("carrier_scarcity_index", "carrierScarcityIndex"),
        description="Share of lanes with poor carrier coverage",
    )

    @field_validator("location_id", mode="before")
    @classmethod
    def canonicalize_id(cls, v):
        if v is None:
            return v
        return canonical_location_id(v)

    @field_validator("is_mountainous", "is_island", "has_winter_risk", mode="before")
    @classmethod
    def null_flag_is_false(cls, v):
        return False if v is None else v

    @field_validator("carrier_scarcity_index", mode="before")
    @classmethod
    def null_scarcity_is_zero(cls, v):
        return 0.0 if v is None else v
