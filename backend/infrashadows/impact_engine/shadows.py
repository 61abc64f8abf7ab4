"""
Impact shadows: display radii for the map layer.

    water    = strain % x 2
    power    = strain % x 1.5
    drainage = 300 / 200 / 100 for High / Medium / Low risk
    zoning   = violations x 100

Radii are metres when rendered as GeoJSON circles around the site.
"""

from __future__ import annotations

import math

from shapely.geometry import Point, mapping
from shapely.ops import transform

from infrashadows.models.schemas import (
    DrainageImpactResult, ImpactShadow, PowerLoadResult, RiskLevel,
    WaterDemandResult, ZoningResult,
)

WATER_RADIUS_FACTOR = 2.0
POWER_RADIUS_FACTOR = 1.5
DRAINAGE_RADII: dict[RiskLevel, float] = {
    RiskLevel.HIGH: 300.0,
    RiskLevel.MEDIUM: 200.0,
    RiskLevel.LOW: 100.0,
}
ZONING_RADIUS_PER_VIOLATION = 100.0

METERS_PER_DEGREE = 111_320.0


def project_impact_shadows(
    water: WaterDemandResult,
    power: PowerLoadResult,
    drainage: DrainageImpactResult,
    zoning: ZoningResult,
) -> list[ImpactShadow]:
    """One shadow per domain, in water/power/drainage/zoning order."""
    return [
        ImpactShadow(
            domain="water",
            radius=max(0.0, water.strain_percentage * WATER_RADIUS_FACTOR),
            intensity=water.risk_level.value,
        ),
        ImpactShadow(
            domain="power",
            radius=max(0.0, power.strain_percentage * POWER_RADIUS_FACTOR),
            intensity=power.risk_level.value,
        ),
        ImpactShadow(
            domain="drainage",
            radius=DRAINAGE_RADII[drainage.risk_level],
            intensity=drainage.risk_level.value,
        ),
        ImpactShadow(
            domain="zoning",
            radius=len(zoning.violations) * ZONING_RADIUS_PER_VIOLATION,
            intensity="Violation" if zoning.violations else None,
        ),
    ]


def _to_lnglat(origin_lng: float, origin_lat: float):
    """Equirectangular projection from local metres back to lon/lat."""
    lat_to_m = METERS_PER_DEGREE
    lng_to_m = math.cos(math.radians(origin_lat)) * METERS_PER_DEGREE

    def project(x, y, z=None):
        return (origin_lng + x / lng_to_m, origin_lat + y / lat_to_m)

    return project


def shadows_to_geojson(
    shadows: list[ImpactShadow],
    latitude: float,
    longitude: float,
    resolution: int = 32,
) -> dict:
    """GeoJSON FeatureCollection of circle polygons centred on the site.

    Shadows with a zero radius have no footprint and are skipped.
    """
    project = _to_lnglat(longitude, latitude)
    features = []
    for shadow in shadows:
        if shadow.radius <= 0:
            continue
        circle = Point(0, 0).buffer(shadow.radius, resolution)
        features.append({
            "type": "Feature",
            "geometry": mapping(transform(project, circle)),
            "properties": {
                "domain": shadow.domain,
                "radius": shadow.radius,
                "intensity": shadow.intensity,
            },
        })
    return {"type": "FeatureCollection", "features": features}
