"""Tests for water demand and the shared occupancy/amenity rules."""

from __future__ import annotations

from dataclasses import replace

import pytest

from infrashadows.impact_engine.demand import amenity_demand, occupancy_rate
from infrashadows.impact_engine.water import (
    WATER_TABLE, calculate_water_demand, get_water_conservation_recommendations,
)
from infrashadows.models.schemas import BuildingProfile, UnitType


def _make_profile(units=None, unit_types=None, amenities=None) -> BuildingProfile:
    return BuildingProfile(
        units=units,
        unit_types=unit_types or [],
        amenities=amenities or [],
    )


class TestUniformOccupancy:
    """Profiles without a unit mix use 2.5 occupants per unit."""

    def test_48_units(self):
        result = calculate_water_demand(_make_profile(units=48))
        assert result.estimated_occupancy == 120
        assert result.breakdown.unit_based_demand == 18000
        assert result.breakdown.common_areas_demand == 2400
        assert result.breakdown.amenities_demand == 0
        assert result.daily_demand_liters == 20400
        assert result.strain_percentage == pytest.approx(1.02)
        assert result.risk_level == "Low"

    def test_monthly_totals(self):
        result = calculate_water_demand(_make_profile(units=48))
        assert result.monthly_demand_liters == 612000
        assert result.monthly_demand_cubic_meters == 612

    def test_no_units_is_zero_demand(self):
        result = calculate_water_demand(BuildingProfile())
        assert result.daily_demand_liters == 0
        assert result.strain_percentage == 0
        assert result.risk_level == "Low"


class TestUnitMix:
    """Unit types are matched by substring; the last matching rule wins."""

    def test_known_types(self):
        profile = _make_profile(
            units=10,
            unit_types=[UnitType(type="Studio", count=4), UnitType(type="2 Bedroom", count=6)],
        )
        result = calculate_water_demand(profile)
        # 4 * 1.2 + 6 * 2.5 = 19.8 occupants
        assert result.estimated_occupancy == 20
        assert result.breakdown.unit_based_demand == 2970
        assert result.breakdown.common_areas_demand == 500

    def test_last_match_wins(self):
        # "3 bedroom" (3.5) is declared before "penthouse" (4.0)
        assert occupancy_rate("3 Bedroom Penthouse", WATER_TABLE) == 4.0
        assert occupancy_rate("Studio Penthouse", WATER_TABLE) == 4.0

    def test_unknown_type_uses_default(self):
        assert occupancy_rate("Luxury Loft", WATER_TABLE) == 2.5

    def test_unit_mix_without_unit_count_has_no_common_areas(self):
        profile = _make_profile(unit_types=[UnitType(type="1 Bedroom", count=10)])
        result = calculate_water_demand(profile)
        assert result.breakdown.unit_based_demand == 2250
        assert result.breakdown.common_areas_demand == 0


class TestAmenities:
    """Every matching amenity rule adds its demand."""

    def test_single_amenity(self):
        result = calculate_water_demand(_make_profile(amenities=["Gym"]))
        assert result.breakdown.amenities_demand == 2000

    def test_amenity_matching_several_rules_adds_each(self):
        demand, matched = amenity_demand("Swimming Pool with Garden", WATER_TABLE)
        assert demand == 8000
        assert matched == ["swimming pool", "garden"]

    def test_unmatched_amenity_adds_nothing(self):
        result = calculate_water_demand(_make_profile(amenities=["Rooftop Bar"]))
        assert result.breakdown.amenities_demand == 0

    def test_duplicate_amenities_counted_once(self):
        result = calculate_water_demand(_make_profile(amenities=["Gym", "Gym"]))
        assert result.breakdown.amenities_demand == 2000


class TestStrain:

    def test_strain_not_clamped(self):
        result = calculate_water_demand(_make_profile(units=10000))
        # 25000 occupants * 150 + 10000 * 50 = 4.25M L vs 2M capacity
        assert result.strain_percentage == pytest.approx(212.5)
        assert result.risk_level == "High"
        assert result.impact_score == 100

    def test_zero_capacity_table_reports_no_strain(self):
        table = replace(WATER_TABLE, capacity=0)
        result = calculate_water_demand(_make_profile(units=48), table=table)
        assert result.daily_demand_liters == 20400
        assert result.strain_percentage == 0
        assert result.risk_level == "Low"

    def test_exact_strain_not_serialized(self):
        # 7 units: 17.5 occupants * 150 + 7 * 50 = 2975 L
        result = calculate_water_demand(_make_profile(units=7))
        assert result.strain_percentage == pytest.approx(0.15)
        assert result.unrounded_strain == pytest.approx(0.14875)
        assert "unrounded_strain" not in result.model_dump()

    def test_monotonic_in_units(self):
        previous = -1
        for units in range(0, 500, 25):
            daily = calculate_water_demand(_make_profile(units=units)).daily_demand_liters
            assert daily >= previous
            previous = daily


class TestRecommendations:

    def test_general_recommendations_always_present(self):
        result = calculate_water_demand(_make_profile(units=10))
        recs = get_water_conservation_recommendations(result)
        assert "Install low-flow toilets and showerheads" in recs
        assert "Implement rainwater harvesting system" not in recs

    def test_high_strain_recommendations(self):
        result = calculate_water_demand(_make_profile(units=10000, amenities=["Swimming Pool", "Garden"]))
        recs = get_water_conservation_recommendations(result)
        assert "Implement rainwater harvesting system" in recs
        assert "Use pool covers to reduce evaporation from swimming pools" in recs
        assert "Consider borehole water supply to supplement municipal water" in recs
