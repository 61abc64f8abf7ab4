"""
Electrical load against the Kilimani distribution grid.

Calibrated on Kenya Power residential usage:
  - 3.5 kWh per person per day
  - 1.2 kWh per unit per day for common areas
  - Area grid capacity of 50,000 kWh per day
  - Peak demand = 1.5x the average hourly demand
"""

from __future__ import annotations

from infrashadows.impact_engine.demand import (
    DemandTable, estimate_demand, impact_score, strain_percentage,
)
from infrashadows.impact_engine.thresholds import (
    RISK_THRESHOLDS, classify_risk, round_half_up, to_int,
)
from infrashadows.models.schemas import (
    BuildingProfile, DemandBreakdown, PowerLoadResult,
)

# kWh per day added by each amenity keyword
POWER_AMENITY_DEMAND: tuple[tuple[str, float], ...] = (
    ("swimming pool", 25),
    ("gym", 40),
    ("elevator", 30),
    ("central air conditioning", 100),
    ("security system", 10),
    ("common area lighting", 15),
    ("water heating", 50),
    ("laundry", 20),
)

POWER_TABLE = DemandTable(
    person_demand=3.5,
    common_area_rate=1.2,
    capacity=50_000,
    amenity_rules=POWER_AMENITY_DEMAND,
)

PEAK_FACTOR = 1.5
DAYS_PER_MONTH = 30


def calculate_power_load(
    profile: BuildingProfile,
    table: DemandTable = POWER_TABLE,
) -> PowerLoadResult:
    """Daily/monthly/peak electrical demand and strain on the local grid."""
    estimate = estimate_demand(profile, table)
    daily = estimate.total
    strain = strain_percentage(daily, table)
    peak_kw = (daily / 24) * PEAK_FACTOR

    return PowerLoadResult(
        daily_demand_kwh=to_int(daily),
        monthly_demand_kwh=to_int(daily * DAYS_PER_MONTH),
        peak_demand_kw=round_half_up(peak_kw, 2),
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


def get_power_conservation_recommendations(result: PowerLoadResult) -> list[str]:
    recommendations: list[str] = []

    if result.strain_percentage > RISK_THRESHOLDS["medium"]:
        recommendations.append("Install energy-efficient appliances to reduce consumption")
        recommendations.append("Implement solar panels to supplement grid power")
        recommendations.append("Consider energy storage solutions for peak demand management")

    if result.breakdown.amenities_demand > 100:
        recommendations.append("Use timers or motion sensors for common area lighting")
        recommendations.append("Install energy-efficient equipment in gym facilities")
        recommendations.append("Consider variable frequency drives for pool pumps")

    if result.strain_percentage > RISK_THRESHOLDS["low"]:
        recommendations.append("Install individual meters for units to encourage conservation")
        recommendations.append("Consider load-shedding strategies during peak hours")

    recommendations.append("Use LED lighting throughout the building")
    recommendations.append("Install programmable thermostats for climate control")
    recommendations.append("Consider energy-efficient building envelope design")
    return recommendations
