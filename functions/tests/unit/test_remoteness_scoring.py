"""Unit tests for the remoteness scoring engine.

Tests cover:
- Each component score and its thresholds
- The winter window across the year boundary
- Category boundaries and the surcharge table
- The worked examples (remote record, missing record)
"""

import pytest

from models.remoteness import RemotenessCategory, SurchargeRange
from services.remoteness_scoring import (
    SURCHARGE_TABLE,
    WINTER_MONTHS,
    carrier_score,
    categorize_score,
    compute_components,
    density_score,
    metro_access_score,
    road_terrain_score,
    score_location,
    suggested_surcharge,
)


class TestDensityScore:
    """Tests for density_score."""

    @pytest.mark.parametrize("density,expected", [
        (0, 2),
        (149.99, 2),
        (150, 1),
        (499.999, 1),
        (500, 0),
        (38000, 0),
        (None, 0),
    ])
    def test_thresholds(self, density, expected):
        """Sparse areas score higher; unknown density scores 0."""
        assert density_score(density) == expected


class TestMetroAccessScore:
    """Tests for metro_access_score."""

    @pytest.mark.parametrize("city,expected", [
        (None, 0),
        (30, 0),
        (60, 0),
        (60.5, 1),
        (90, 1),
        (90.1, 2),
        (300, 2),
    ])
    def test_city_drive_time(self, city, expected):
        """City drive time bands are exclusive at the lower edge."""
        assert metro_access_score(city, None) == expected

    def test_interstate_adds_independently(self):
        """Interstate distance adds on top of the city score."""
        assert metro_access_score(None, 31) == 1
        assert metro_access_score(95, 31) == 3
        assert metro_access_score(75, 31) == 2

    def test_interstate_boundary(self):
        """Exactly 30 minutes to an interstate does not score."""
        assert metro_access_score(None, 30) == 0


class TestRoadTerrainScore:
    """Tests for road_terrain_score."""

    def test_flat_mainland(self):
        """No terrain flags scores 0."""
        assert road_terrain_score(False, False, False, 1) == 0

    def test_mountain_and_island_are_additive(self):
        """Mountain and island both count."""
        assert road_terrain_score(True, True, False, 7) == 2

    @pytest.mark.parametrize("month", [11, 12, 1, 2, 3])
    def test_winter_bonus_in_window(self, month):
        """Winter risk adds a point from November through March."""
        assert road_terrain_score(False, False, True, month) == 1

    @pytest.mark.parametrize("month", [4, 5, 6, 7, 8, 9, 10])
    def test_no_winter_bonus_outside_window(self, month):
        """Winter risk is ignored April through October."""
        assert road_terrain_score(False, False, True, month) == 0

    def test_winter_month_without_risk(self):
        """Winter months alone do not score."""
        assert road_terrain_score(False, False, False, 12) == 0

    def test_winter_window_constant(self):
        """Window is the five months Nov-Mar."""
        assert WINTER_MONTHS == {11, 12, 1, 2, 3}


class TestCarrierScore:
    """Tests for carrier_score."""

    @pytest.mark.parametrize("index,expected", [
        (0.0, 0),
        (0.4, 0),
        (0.41, 1),
        (0.7, 1),
        (0.71, 2),
        (1.0, 2),
    ])
    def test_thresholds(self, index, expected):
        """Scarcity bands are exclusive at the lower edge."""
        assert carrier_score(index) == expected


class TestCategorize:
    """Tests for categorize_score."""

    @pytest.mark.parametrize("total,expected", [
        (0, RemotenessCategory.URBAN_EASY),
        (2, RemotenessCategory.URBAN_EASY),
        (3, RemotenessCategory.NORMAL),
        (4, RemotenessCategory.NORMAL),
        (5, RemotenessCategory.RURAL_DIFFICULT),
        (6, RemotenessCategory.RURAL_DIFFICULT),
        (7, RemotenessCategory.REMOTE_PREMIUM),
        (8, RemotenessCategory.REMOTE_PREMIUM),
        (50, RemotenessCategory.REMOTE_PREMIUM),
    ])
    def test_boundaries(self, total, expected):
        """Boundaries belong to the lower category."""
        assert categorize_score(total) == expected

    def test_partition_is_contiguous_and_monotonic(self):
        """Categories never step backwards as the total rises."""
        order = list(RemotenessCategory)
        ranks = [order.index(categorize_score(total)) for total in range(0, 20)]
        assert ranks == sorted(ranks)
        assert set(ranks) == {0, 1, 2, 3}


class TestSuggestedSurcharge:
    """Tests for the surcharge table."""

    @pytest.mark.parametrize("category,low,high", [
        (RemotenessCategory.URBAN_EASY, 0, 0),
        (RemotenessCategory.NORMAL, 25, 50),
        (RemotenessCategory.RURAL_DIFFICULT, 75, 150),
        (RemotenessCategory.REMOTE_PREMIUM, 150, 300),
    ])
    def test_table(self, category, low, high):
        """Each category maps to its fixed USD lump-sum band."""
        surcharge = suggested_surcharge(category)
        assert surcharge.min == low
        assert surcharge.max == high
        assert surcharge.currency == "USD"
        assert surcharge.type == "lump_sum"

    def test_every_category_has_a_band(self):
        """Table covers the whole enum."""
        assert set(SURCHARGE_TABLE) == set(RemotenessCategory)


class TestComputeComponents:
    """Tests for compute_components."""

    def test_missing_record_is_all_zero(self):
        """No record scores zero everywhere."""
        components = compute_components(None, 1)
        assert components.density == 0
        assert components.metro_access == 0
        assert components.road_terrain == 0
        assert components.carrier == 0
        assert components.total == 0

    def test_total_is_sum_of_components(self, make_record):
        """Total always equals the four components added up."""
        for month in range(1, 13):
            for record in [
                make_record(),
                make_record(population_density=200, carrier_scarcity_index=0.5),
                make_record(is_island=True, has_winter_risk=True, drive_time_to_interstate_minutes=45),
            ]:
                c = compute_components(record, month)
                assert c.total == c.density + c.metro_access + c.road_terrain + c.carrier


class TestScoreLocation:
    """Tests for score_location."""

    def test_worked_example_january(self, remote_record):
        """Remote mountain ZIP in January scores 9, REMOTE_PREMIUM, 150-300."""
        result = score_location(remote_record, 1)

        assert result.components.density == 2
        assert result.components.metro_access == 3
        assert result.components.road_terrain == 2
        assert result.components.carrier == 2
        assert result.components.total == 9
        assert result.category == RemotenessCategory.REMOTE_PREMIUM
        assert result.surcharge == SurchargeRange(min=150, max=300)

    def test_worked_example_boundary_months(self, remote_record):
        """March keeps the winter point, April drops it."""
        assert score_location(remote_record, 3).components.road_terrain == 2
        assert score_location(remote_record, 4).components.road_terrain == 1

    def test_absent_record(self):
        """No record gives the lowest tier and a zero band."""
        result = score_location(None, 6)

        assert result.components.total == 0
        assert result.category == RemotenessCategory.URBAN_EASY
        assert result.surcharge == SurchargeRange.zero()
        assert result.location_id is None

    def test_echoes_display_fields(self, remote_record):
        """Identifier, city and state come from the record."""
        result = score_location(remote_record, 7)

        assert result.location_id == "82190"
        assert result.city == "Yellowstone National Park"
        assert result.region == "WY"
        assert result.month == 7

    def test_idempotent(self, remote_record):
        """Scoring twice gives identical results."""
        assert score_location(remote_record, 2) == score_location(remote_record, 2)

    def test_same_category_same_surcharge(self, make_record):
        """Different records in one category share the same band."""
        a = score_location(make_record(population_density=100, carrier_scarcity_index=0.5), 6)
        b = score_location(make_record(is_mountainous=True, is_island=True, drive_time_to_city_100k_minutes=70), 6)

        assert a.components != b.components
        assert a.category == b.category == RemotenessCategory.NORMAL
        assert a.surcharge == b.surcharge
