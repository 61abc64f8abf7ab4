"""
Green cover loss and its environmental consequences.

Pre-development vegetation comes from the profile or, failing that, from the
typical Kilimani mix of an undeveloped plot. Post-development vegetation is
resolved from one of three sources (checked in order):

  1. ProvidedVegetation: the profile lists proposed vegetation.
  2. DerivedFromSurfaces: gardens split 30/30/40 into trees/shrubs/grass,
     plus any listed grass surface.
  3. EstimatedFromFootprint: 70% of the open (non-footprint) area is
     developed; the remaining 30% is split
     10/20/60/10 into trees/shrubs/grass/garden.

Per-kind factors turn areas into carbon sequestration (kg CO2/yr),
a biodiversity index and a local cooling effect.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Union

from infrashadows.impact_engine.surfaces import estimate_plot_size
from infrashadows.impact_engine.thresholds import (
    RISK_THRESHOLDS, classify_risk, round_half_up, safe_ratio, to_int,
)
from infrashadows.models.schemas import BuildingProfile, GreenCoverResult

logger = logging.getLogger(__name__)

# kg CO2 per m² per year
CARBON_SEQUESTRATION: dict[str, float] = {
    "trees": 2.5,
    "shrubs": 1.2,
    "grass": 0.5,
    "garden": 1.0,
}

# 0-10 scale
BIODIVERSITY_SCORES: dict[str, float] = {
    "trees": 8.0,
    "shrubs": 6.0,
    "grass": 3.0,
    "garden": 7.0,
}

# °C reduction
COOLING_EFFECT: dict[str, float] = {
    "trees": 2.0,
    "shrubs": 0.8,
    "grass": 0.5,
    "garden": 1.0,
}

DEFAULT_VEGETATION_DISTRIBUTION: dict[str, float] = {
    "trees": 0.3,
    "shrubs": 0.2,
    "grass": 0.4,
    "garden": 0.1,
}

DEVELOPED_SHARE_OF_OPEN_AREA = 0.7
REMAINING_GREEN_DISTRIBUTION: dict[str, float] = {
    "trees": 0.1,
    "shrubs": 0.2,
    "grass": 0.6,
    "garden": 0.1,
}
GARDEN_SPLIT: dict[str, float] = {
    "trees": 0.3,
    "shrubs": 0.3,
    "grass": 0.4,
    "garden": 0.0,  # garden area is fully reassigned to the kinds above
}


# ──────────────────────────────────────────────────────────────────
# POST-DEVELOPMENT SOURCES
# ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ProvidedVegetation:
    vegetation: dict[str, float] = field(default_factory=dict)
    source: str = "provided"

    def areas(self) -> dict[str, float]:
        return dict(self.vegetation)


@dataclass(frozen=True)
class DerivedFromSurfaces:
    surfaces: dict[str, float] = field(default_factory=dict)
    source: str = "derived_from_surfaces"

    def areas(self) -> dict[str, float]:
        garden = self.surfaces.get("garden") or 0
        areas = {kind: garden * share for kind, share in GARDEN_SPLIT.items()}
        areas["grass"] += self.surfaces.get("grass") or 0
        return areas


@dataclass(frozen=True)
class EstimatedFromFootprint:
    footprint: float
    plot_size: float
    source: str = "estimated_from_footprint"

    @property
    def developed_area(self) -> float:
        open_area = max(0.0, self.plot_size - self.footprint)
        return self.footprint + open_area * DEVELOPED_SHARE_OF_OPEN_AREA

    def areas(self) -> dict[str, float]:
        open_area = max(0.0, self.plot_size - self.footprint)
        remaining_green = open_area * (1 - DEVELOPED_SHARE_OF_OPEN_AREA)
        return {
            kind: remaining_green * share
            for kind, share in REMAINING_GREEN_DISTRIBUTION.items()
        }


VegetationSource = Union[ProvidedVegetation, DerivedFromSurfaces, EstimatedFromFootprint]


def resolve_post_development(profile: BuildingProfile) -> VegetationSource:
    if profile.proposed_vegetation is not None:
        return ProvidedVegetation(vegetation=dict(profile.proposed_vegetation))
    if profile.surfaces is not None:
        return DerivedFromSurfaces(surfaces=dict(profile.surfaces))
    return EstimatedFromFootprint(
        footprint=profile.building_footprint or 0,
        plot_size=estimate_plot_size(profile),
    )


def pre_development_vegetation(profile: BuildingProfile) -> dict[str, float]:
    if profile.existing_vegetation is not None:
        return dict(profile.existing_vegetation)
    plot_size = estimate_plot_size(profile)
    return {
        kind: plot_size * share
        for kind, share in DEFAULT_VEGETATION_DISTRIBUTION.items()
    }


def _weighted(vegetation: dict[str, float], factors: dict[str, float]) -> float:
    return sum(area * factors.get(kind, 0) for kind, area in vegetation.items())


# ──────────────────────────────────────────────────────────────────
# CALCULATOR
# ──────────────────────────────────────────────────────────────────

def calculate_green_cover_loss(profile: BuildingProfile) -> GreenCoverResult:
    """Vegetation loss plus carbon, biodiversity and heat-island impacts."""
    plot_size = estimate_plot_size(profile)
    pre = pre_development_vegetation(profile)
    post_source = resolve_post_development(profile)
    post = post_source.areas()

    pre_total = sum(pre.values())
    post_total = sum(post.values())
    degenerate = False

    loss = pre_total - post_total
    loss_ratio, flag = safe_ratio(loss, pre_total)
    loss_percentage = loss_ratio * 100
    degenerate |= flag

    carbon_loss = _weighted(pre, CARBON_SEQUESTRATION) - _weighted(post, CARBON_SEQUESTRATION)

    # Biodiversity: area-normalized index, scaled x10
    pre_index, flag = safe_ratio(_weighted(pre, BIODIVERSITY_SCORES), pre_total)
    degenerate |= flag
    post_index, _ = safe_ratio(_weighted(post, BIODIVERSITY_SCORES), post_total)
    pre_index *= 10
    post_index *= 10
    biodiversity_ratio, flag = safe_ratio(pre_index - post_index, pre_index)
    biodiversity_impact = biodiversity_ratio * 100
    degenerate |= flag

    # Urban heat island: cooling per m² of plot
    pre_cooling, flag = safe_ratio(_weighted(pre, COOLING_EFFECT), plot_size)
    degenerate |= flag
    post_cooling, _ = safe_ratio(_weighted(post, COOLING_EFFECT), plot_size)
    temperature_increase = pre_cooling - post_cooling

    if degenerate:
        logger.debug("Green cover has a zero denominator (pre=%s, plot=%s)", pre_total, plot_size)

    return GreenCoverResult(
        pre_development_green_cover=to_int(pre_total),
        post_development_green_cover=to_int(post_total),
        green_cover_loss=to_int(loss),
        green_cover_loss_percentage=round_half_up(loss_percentage, 1),
        environmental_impact=classify_risk(loss_percentage),
        carbon_sequestration_loss=round_half_up(carbon_loss, 1),
        biodiversity_impact_percentage=round_half_up(biodiversity_impact, 1),
        temperature_increase=round_half_up(temperature_increase, 1),
        pre_development_vegetation={kind: to_int(area) for kind, area in pre.items()},
        post_development_vegetation={kind: to_int(area) for kind, area in post.items()},
        vegetation_source=post_source.source,
        degenerate=degenerate,
    )


def get_green_cover_recommendations(result: GreenCoverResult) -> list[str]:
    recommendations: list[str] = []

    if result.green_cover_loss_percentage > RISK_THRESHOLDS["medium"]:
        recommendations.append("Implement green roofs to increase vegetation coverage")
        recommendations.append("Create vertical gardens on building facades")
        recommendations.append("Increase tree planting density in remaining green spaces")

    if result.temperature_increase > 1.0:
        recommendations.append("Plant shade trees around the building to reduce heat island effect")
        recommendations.append("Use light-colored or reflective materials for hardscapes")
        recommendations.append("Install water features to provide evaporative cooling")

    if result.biodiversity_impact_percentage > RISK_THRESHOLDS["low"]:
        recommendations.append("Create diverse planting areas with native species")
        recommendations.append("Install bird and insect habitats throughout the landscape")
        recommendations.append("Establish wildlife corridors connecting green spaces")

    recommendations.append("Preserve existing mature trees wherever possible")
    recommendations.append("Use drought-resistant native plants to reduce water consumption")
    recommendations.append("Implement sustainable landscape maintenance practices")
    return recommendations
