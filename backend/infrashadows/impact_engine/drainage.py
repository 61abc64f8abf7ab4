"""
Stormwater runoff against the Kilimani drainage network.

Uses the rational method with area-weighted runoff coefficients:
  - Annual runoff  = rainfall (mm) x area (m²) x C   (1 mm = 1 L/m²)
  - Peak runoff    = (intensity mm/h / 3600) x C x area   (L/s)
  - Strain         = peak / (capacity L/s/ha x area ha) x 100

Calibration: 1000 mm annual rainfall, 25 mm/h design storm,
150 L/s per hectare of network capacity.
"""

from __future__ import annotations

import logging

from infrashadows.impact_engine.surfaces import resolve_surfaces
from infrashadows.impact_engine.thresholds import (
    RISK_THRESHOLDS, classify_flood_risk, classify_risk, round_half_up,
    safe_ratio, to_int,
)
from infrashadows.models.schemas import BuildingProfile, DrainageImpactResult

logger = logging.getLogger(__name__)

ANNUAL_RAINFALL_MM = 1000
PEAK_RAINFALL_INTENSITY_MM_PER_HOUR = 25
DRAINAGE_CAPACITY_LPS_PER_HECTARE = 150
SQM_TO_HECTARE = 0.0001
MM_TO_LITERS_PER_SQM = 1

RUNOFF_COEFFICIENTS: dict[str, float] = {
    "roof": 0.95,
    "concrete": 0.90,
    "asphalt": 0.85,
    "gravel": 0.50,
    "grass": 0.25,
    "garden": 0.35,
    "natural_ground": 0.30,
}


def runoff_coefficient(surface_kind: str) -> float:
    """Coefficient for a surface kind; unknown kinds behave like natural ground."""
    return RUNOFF_COEFFICIENTS.get(surface_kind, RUNOFF_COEFFICIENTS["natural_ground"])


def calculate_drainage_impact(profile: BuildingProfile) -> DrainageImpactResult:
    """Annual and peak runoff plus strain on the local drainage capacity."""
    source = resolve_surfaces(profile)
    surface_areas = source.areas()

    total_area = sum(surface_areas.values())
    weighted_sum = sum(runoff_coefficient(kind) * area for kind, area in surface_areas.items())
    coefficient, degenerate = safe_ratio(weighted_sum, total_area)
    if degenerate:
        logger.debug("Zero total surface area (%s); reporting zero runoff", source.source)

    annual_rainfall_liters = ANNUAL_RAINFALL_MM * MM_TO_LITERS_PER_SQM * total_area
    annual_runoff = annual_rainfall_liters * coefficient

    peak_runoff = (PEAK_RAINFALL_INTENSITY_MM_PER_HOUR / 3600) * coefficient * total_area

    capacity_lps = DRAINAGE_CAPACITY_LPS_PER_HECTARE * total_area * SQM_TO_HECTARE
    strain_ratio, _ = safe_ratio(peak_runoff, capacity_lps)
    strain = strain_ratio * 100

    # Pre-development: the same rainfall falling on natural ground
    pre_development_runoff = annual_rainfall_liters * RUNOFF_COEFFICIENTS["natural_ground"]
    additional_runoff = annual_runoff - pre_development_runoff

    return DrainageImpactResult(
        annual_runoff_liters=to_int(annual_runoff),
        peak_runoff_liters_per_second=round_half_up(peak_runoff, 2),
        strain_percentage=round_half_up(strain, 2),
        risk_level=classify_risk(strain),
        flood_risk=classify_flood_risk(strain),
        weighted_runoff_coefficient=round_half_up(coefficient, 2),
        additional_runoff_liters=to_int(additional_runoff),
        pre_development_runoff_liters=to_int(pre_development_runoff),
        surface_areas={kind: to_int(area) for kind, area in surface_areas.items()},
        total_area=to_int(total_area),
        surface_source=source.source,
        degenerate=degenerate,
    )


def get_drainage_mitigation_recommendations(result: DrainageImpactResult) -> list[str]:
    recommendations: list[str] = []

    if result.strain_percentage > RISK_THRESHOLDS["medium"]:
        recommendations.append("Install rainwater harvesting system to reduce runoff")
        recommendations.append("Implement detention ponds or underground storage tanks")
        recommendations.append("Consider permeable paving for parking areas and walkways")

    if result.weighted_runoff_coefficient > 0.7:
        recommendations.append("Increase green space to improve water absorption")
        recommendations.append("Install green roofs to reduce runoff from roof surfaces")
        recommendations.append("Use bioswales and rain gardens for natural drainage")

    if result.strain_percentage > RISK_THRESHOLDS["low"]:
        recommendations.append("Implement proper site grading to direct water away from buildings")
        recommendations.append("Install French drains around the perimeter of the property")

    recommendations.append("Regularly maintain drainage systems to prevent blockages")
    recommendations.append("Consider sustainable urban drainage systems (SUDS)")
    return recommendations
