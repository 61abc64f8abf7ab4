"""Tests for the full impact analysis pipeline."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from infrashadows.config import settings
from infrashadows.impact_engine import ImpactAnalyzer, analyze
from infrashadows.impact_engine.validation import (
    MissingInputError, ensure_complete, validate_profile,
)
from infrashadows.impact_engine.zoning import ZoningRules
from infrashadows.models.schemas import BuildingProfile, EvidenceRecord, UnitType


@pytest.fixture
def analyzer():
    return ImpactAnalyzer(ZoningRules(max_floors=10, max_units=80))


@pytest.fixture
def full_evidence():
    return EvidenceRecord(
        public_hearing_held=True,
        nema_approval=True,
        community_feedback_incorporated=True,
        submitted_documents=["LPDP Submission", "Traffic Impact Assessment"],
    )


def _make_profile(
    floors: int = 8,
    units: int = 48,
    plot_size: float = 3000,
    building_footprint: float = 1000,
    amenities: list = None,
) -> BuildingProfile:
    return BuildingProfile(
        name="Kilimani Heights",
        location="Kilimani, Nairobi",
        floors=floors,
        units=units,
        unit_types=[
            UnitType(type="1 Bedroom", count=units // 2),
            UnitType(type="2 Bedroom", count=units - units // 2),
        ],
        amenities=amenities if amenities is not None else ["Swimming Pool", "Gym", "Elevator"],
        parking_spaces=60,
        plot_size=plot_size,
        building_footprint=building_footprint,
    )


class TestPipeline:

    def test_all_sections_present(self, analyzer, full_evidence):
        result = analyzer.analyze(_make_profile(), full_evidence)
        assert result.water.daily_demand_liters > 0
        assert result.power.daily_demand_kwh > 0
        assert result.drainage.total_area == 3000
        assert result.green_cover.green_cover_loss == 2400
        assert result.zoning.compliant is True
        assert result.participation.missing_processes == []
        assert [s.domain for s in result.shadows] == ["water", "power", "drainage", "zoning"]
        assert set(result.recommendations) == {"water", "power", "drainage", "green_cover"}

    def test_shadow_lookup(self, analyzer):
        result = analyzer.analyze(_make_profile(floors=12))
        assert result.shadow_for("zoning").radius == 100
        assert result.shadow_for("traffic") is None

    def test_compliant_development_scores_well(self, analyzer, full_evidence):
        result = analyzer.analyze(_make_profile(), full_evidence)
        assert result.legitimacy.capped is False
        assert result.legitimacy.status_band == "Green"

    def test_module_level_analyze(self, full_evidence):
        result = analyze(_make_profile(), full_evidence)
        assert result.zoning.zone_type == "R3 - High Density Residential"


class TestDeterminism:

    def test_same_input_same_output(self, analyzer, full_evidence):
        profile = _make_profile(floors=14, units=120)
        first = analyzer.analyze(profile, full_evidence)
        second = analyzer.analyze(profile, full_evidence)
        assert first.model_dump() == second.model_dump()

    def test_default_evidence_is_deterministic(self, analyzer):
        profile = _make_profile()
        assert analyzer.analyze(profile) == analyzer.analyze(profile)


class TestInvariants:

    def test_units_monotonic(self, analyzer):
        previous_water = previous_power = -1
        for units in range(0, 300, 20):
            result = analyzer.analyze(_make_profile(units=units))
            assert result.water.daily_demand_liters >= previous_water
            assert result.power.daily_demand_kwh >= previous_power
            previous_water = result.water.daily_demand_liters
            previous_power = result.power.daily_demand_kwh

    def test_height_violation_caps_score(self, analyzer, full_evidence):
        for floors in range(11, 40, 4):
            result = analyzer.analyze(_make_profile(floors=floors), full_evidence)
            assert result.zoning.violations[0].severity == "High"
            assert result.legitimacy.overall <= 50

    def test_missing_nema_caps_score(self, analyzer):
        evidence = EvidenceRecord(
            public_hearing_held=True,
            community_feedback_incorporated=True,
            amenity_density_score=100,
            network_load_score=100,
        )
        result = analyzer.analyze(_make_profile(), evidence)
        assert result.legitimacy.overall <= 50
        assert "Environmental Impact Assessment" in result.participation.missing_processes

    def test_zoning_example(self, analyzer, full_evidence):
        result = analyzer.analyze(_make_profile(floors=12, units=48), full_evidence)
        assert len(result.zoning.violations) == 1
        assert result.zoning.violations[0].type == "Height"
        assert result.legitimacy.components["zoning_score"] == 75


class TestDegenerateProfiles:

    def test_empty_profile_does_not_raise(self, analyzer):
        result = analyzer.analyze(BuildingProfile())
        assert result.water.daily_demand_liters == 0
        assert result.power.daily_demand_kwh == 0
        assert result.drainage.degenerate is True
        assert result.green_cover.degenerate is True
        assert 0 <= result.legitimacy.overall <= 100

    def test_footprint_exceeding_plot(self, analyzer):
        result = analyzer.analyze(_make_profile(plot_size=500, building_footprint=900))
        assert all(area >= 0 for area in result.drainage.surface_areas.values())
        assert all(area >= 0 for area in result.green_cover.post_development_vegetation.values())


class TestValidation:

    def test_complete_profile(self):
        validation = validate_profile(_make_profile())
        assert validation.complete is True
        assert validation.missing_fields == []

    def test_missing_fields(self):
        validation = validate_profile(BuildingProfile(units=10, location="  "))
        assert validation.missing_fields == ["floors", "location"]

    def test_ensure_complete_raises(self):
        with pytest.raises(MissingInputError) as exc:
            ensure_complete(BuildingProfile())
        assert exc.value.missing_fields == ["floors", "units", "location"]
        assert "floors" in str(exc.value)


class TestInputBounds:

    @pytest.mark.parametrize("field", ["plot_size", "building_footprint"])
    @pytest.mark.parametrize("value", [float("inf"), float("nan")])
    def test_non_finite_area_rejected(self, field, value):
        with pytest.raises(ValidationError):
            BuildingProfile(**{field: value})

    def test_huge_unit_count_rejected(self):
        with pytest.raises(ValidationError):
            BuildingProfile(units=10**400)
        with pytest.raises(ValidationError):
            UnitType(type="Studio", count=10**400)

    def test_negative_surface_area_rejected(self):
        with pytest.raises(ValidationError):
            BuildingProfile(surfaces={"roof": 100, "grass": -99})
        with pytest.raises(ValidationError):
            BuildingProfile(existing_vegetation={"trees": -1})

    def test_non_finite_evidence_score_rejected(self):
        with pytest.raises(ValidationError):
            EvidenceRecord(amenity_density_score=float("nan"))

    def test_largest_accepted_profile_analyzes(self, analyzer):
        result = analyzer.analyze(BuildingProfile(
            floors=500, units=100_000, plot_size=100_000_000, building_footprint=100_000_000,
        ))
        assert 0 <= result.legitimacy.overall <= 100
        assert result.water.risk_level == "High"


class TestZoningRulesFromSettings:

    def test_default_rules_follow_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "max_floors", 5)
        result = analyze(_make_profile(floors=8))
        assert result.zoning.violations[0].type == "Height"
        assert "maximum allowed height of 5 floors by 3 floors" in result.zoning.violations[0].description

    def test_analyzer_without_rules_matches_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "max_units", 40)
        result = ImpactAnalyzer().analyze(_make_profile(units=48))
        assert [v.type for v in result.zoning.violations] == ["Density"]
