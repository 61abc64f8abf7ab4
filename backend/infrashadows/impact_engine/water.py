"""
Water demand against the Kilimani municipal supply.

Calibrated on Nairobi Water Company consumption standards:
  - 150 L per person per day
  - 50 L per unit per day for common areas
  - Area supply capacity of 2,000,000 L per day
"""

from __future__ import annotations

from infrashadows.impact_engine.demand import (
    DemandTable, estimate_demand, impact_score, strain_percentage,
)
from infrashadows.impact_engine.thresholds import (
    RISK_THRESHOLDS, classify_risk, round_half_up, to_int,
)
from infrashadows.models.schemas import (
    BuildingProfile, DemandBreakdown, WaterDemandResult,
)

# Litres per day added by each amenity keyword
WATER_AMENITY_DEMAND: tuple[tuple[str, float], ...] = (
    ("swimming pool", 5000),
    ("gym", 2000),
    ("garden", 3000),
    ("water feature", 1500),
    ("car wash", 2000),
    ("laundry", 3000),
)

WATER_TABLE = DemandTable(
    person_demand=150,
    common_area_rate=50,
    capacity=2_000_000,
    amenity_rules=WATER_AMENITY_DEMAND,
)

DAYS_PER_MONTH = 30


def calculate_water_demand(
    profile: BuildingProfile,
    table: DemandTable = WATER_TABLE,
) -> WaterDemandResult:
    """Daily/monthly water demand and strain on the local supply."""
    estimate = estimate_demand(profile, table)
    daily = estimate.total
    strain = strain_percentage(daily, table)

    return WaterDemandResult(
        daily_demand_liters=to_int(daily),
        monthly_demand_liters=to_int(daily * DAYS_PER_MONTH),
        monthly_demand_cubic_meters=to_int(daily * DAYS_PER_MONTH / 1000),
        strain_percentage=round_half_up(strain, 2),
        unrounded_strain=strain,
        risk_level=classify_risk(strain),
        breakdown=DemandBreakdown(
            unit_based_demand=to_int(estimate.unit_based),
            common_areas_demand=to_int(estimate.common_areas),
            amenities_demand=to_int(estimate.amenities),
        ),
        estimated_occupancy=to_int(estimate.occupancy),
        impact_score=impact_score(strain),
    )


def get_water_conservation_recommendations(result: WaterDemandResult) -> list[str]:
    recommendations: list[str] = []

    if result.strain_percentage > RISK_THRESHOLDS["medium"]:
        recommendations.append("Install water-efficient fixtures to reduce consumption")
        recommendations.append("Implement rainwater harvesting system")
        recommendations.append("Consider greywater recycling for landscaping")

    if result.breakdown.amenities_demand > 5000:
        recommendations.append("Use pool covers to reduce evaporation from swimming pools")
        recommendations.append("Install drip irrigation for gardens instead of sprinklers")

    if result.strain_percentage > RISK_THRESHOLDS["low"]:
        recommendations.append("Install water meters for individual units to encourage conservation")
        recommendations.append("Consider borehole water supply to supplement municipal water")

    recommendations.append("Regular maintenance of plumbing to prevent leaks")
    recommendations.append("Install low-flow toilets and showerheads")
    return recommendations
