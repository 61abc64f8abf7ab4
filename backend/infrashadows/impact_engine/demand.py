"""
Occupancy-driven resource demand shared by the water and power calculators.

Both domains follow the same model:

    total = occupancy * per_person_rate      (unit-based demand)
          + units * common_area_rate         (common areas)
          + sum of matching amenity demands  (amenities)

Category matching is done against ordered rule tables:
  - Occupancy: every rule key is tested as a substring of the lowercased
    unit type, in table order, and the LAST matching rule wins.
  - Amenities: every rule key is tested as a substring of the lowercased
    amenity, and EVERY matching rule adds its demand.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from infrashadows.impact_engine.thresholds import safe_ratio, to_int
from infrashadows.models.schemas import BuildingProfile

# Average occupants per unit type, in match order.
OCCUPANCY_RULES: tuple[tuple[str, float], ...] = (
    ("studio", 1.2),
    ("1 bedroom", 1.5),
    ("2 bedroom", 2.5),
    ("3 bedroom", 3.5),
    ("4 bedroom", 4.5),
    ("penthouse", 4.0),
)
DEFAULT_OCCUPANCY = 2.5


@dataclass(frozen=True)
class DemandTable:
    """Calibration constants for one infrastructure domain."""
    person_demand: float
    common_area_rate: float  # per unit per day
    capacity: float  # area-wide daily capacity
    amenity_rules: tuple[tuple[str, float], ...] = ()
    occupancy_rules: tuple[tuple[str, float], ...] = OCCUPANCY_RULES
    default_occupancy: float = DEFAULT_OCCUPANCY


@dataclass
class DemandEstimate:
    occupancy: float = 0.0
    unit_based: float = 0.0
    common_areas: float = 0.0
    amenities: float = 0.0
    matched_amenities: list[str] = field(default_factory=list)

    @property
    def total(self) -> float:
        return self.unit_based + self.common_areas + self.amenities


def occupancy_rate(unit_type: str, table: DemandTable) -> float:
    """Occupancy for a unit type; the last matching rule overrides earlier ones."""
    label = unit_type.lower()
    rate = table.default_occupancy
    for key, value in table.occupancy_rules:
        if key in label:
            rate = value
    return rate


def amenity_demand(amenity: str, table: DemandTable) -> tuple[float, list[str]]:
    """Cumulative demand of every amenity rule matching this amenity."""
    label = amenity.lower()
    demand = 0.0
    matched: list[str] = []
    for key, value in table.amenity_rules:
        if key in label:
            demand += value
            matched.append(key)
    return demand, matched


def estimate_demand(profile: BuildingProfile, table: DemandTable) -> DemandEstimate:
    """Compute occupancy and the three demand components for a profile."""
    units = profile.units or 0
    estimate = DemandEstimate()

    if profile.unit_types:
        for unit_type in profile.unit_types:
            type_occupancy = (unit_type.count or 0) * occupancy_rate(unit_type.type, table)
            estimate.occupancy += type_occupancy
            estimate.unit_based += type_occupancy * table.person_demand
    elif units:
        estimate.occupancy = units * table.default_occupancy
        estimate.unit_based = estimate.occupancy * table.person_demand

    estimate.common_areas = units * table.common_area_rate

    for amenity in profile.amenities:
        demand, matched = amenity_demand(amenity, table)
        estimate.amenities += demand
        estimate.matched_amenities.extend(matched)

    return estimate


def strain_percentage(total: float, table: DemandTable) -> float:
    """Share of area capacity consumed, in percent. Not clamped to 100.

    A table with no capacity reports 0 strain.
    """
    ratio, _ = safe_ratio(total, table.capacity)
    return ratio * 100


def impact_score(strain: float) -> int:
    """0-100 impact score: the strain percentage, saturating at 100."""
    if strain >= 100:
        return 100
    return to_int(strain)
