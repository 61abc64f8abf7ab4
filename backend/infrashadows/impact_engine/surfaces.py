"""
Surface-area resolution for runoff and vegetation estimates.

A profile resolves to exactly one of three sources, checked in order:

  1. ProvidedSurfaces: the profile lists its surfaces explicitly.
  2. DerivedFromFootprint: roof = footprint; the rest of the plot is split
     across the non-roof kinds of the default mix.
  3. DefaultDistribution: no footprint; the whole plot follows the
     default mix.

When the plot size is missing or zero it is estimated as 2.5x the footprint.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from infrashadows.models.schemas import BuildingProfile

# Share of the plot per surface kind for an unspecified development
DEFAULT_SURFACE_DISTRIBUTION: dict[str, float] = {
    "roof": 0.40,
    "concrete": 0.30,
    "grass": 0.20,
    "garden": 0.10,
}

PLOT_TO_FOOTPRINT_RATIO = 2.5


def estimate_plot_size(profile: BuildingProfile) -> float:
    plot_size = profile.plot_size or 0
    if plot_size > 0:
        return plot_size
    return (profile.building_footprint or 0) * PLOT_TO_FOOTPRINT_RATIO


@dataclass(frozen=True)
class ProvidedSurfaces:
    surfaces: dict[str, float] = field(default_factory=dict)
    source: str = "provided"

    def areas(self) -> dict[str, float]:
        return dict(self.surfaces)


@dataclass(frozen=True)
class DerivedFromFootprint:
    footprint: float
    plot_size: float
    source: str = "derived_from_footprint"

    def areas(self) -> dict[str, float]:
        # Footprints larger than the plot leave no remainder, never a negative one
        remaining = max(0.0, self.plot_size - self.footprint)
        non_roof = {k: v for k, v in DEFAULT_SURFACE_DISTRIBUTION.items() if k != "roof"}
        non_roof_total = sum(non_roof.values())

        areas = {"roof": self.footprint}
        for kind, share in non_roof.items():
            areas[kind] = remaining * (share / non_roof_total)
        return areas


@dataclass(frozen=True)
class DefaultDistribution:
    plot_size: float
    source: str = "default_distribution"

    def areas(self) -> dict[str, float]:
        return {
            kind: self.plot_size * share
            for kind, share in DEFAULT_SURFACE_DISTRIBUTION.items()
        }


SurfaceSource = Union[ProvidedSurfaces, DerivedFromFootprint, DefaultDistribution]


def resolve_surfaces(profile: BuildingProfile) -> SurfaceSource:
    """Pick the surface source for a profile."""
    if profile.surfaces is not None:
        return ProvidedSurfaces(surfaces=dict(profile.surfaces))

    footprint = profile.building_footprint or 0
    plot_size = estimate_plot_size(profile)
    if footprint > 0:
        return DerivedFromFootprint(footprint=footprint, plot_size=plot_size)
    return DefaultDistribution(plot_size=plot_size)
