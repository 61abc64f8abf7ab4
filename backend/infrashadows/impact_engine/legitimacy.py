"""
Legitimacy score: weighted composite of zoning, infrastructure strain and
public-process compliance.

    overall = 0.30 * zoning
            + 0.20 * water/power
            + 0.20 * drainage/green cover
            + 0.15 * public hearing
            + 0.10 * amenity density
            + 0.05 * network load

A High-severity zoning violation or missing NEMA approval caps the overall
score at 50. Bands: Green >= 70, Yellow >= 50, Red below.

Components are computed from full-precision inputs; rounding to integers
happens only when the score is emitted.
"""

from __future__ import annotations

from infrashadows.impact_engine.thresholds import to_int
from infrashadows.models.schemas import (
    DrainageImpactResult, GreenCoverResult, LegitimacyScore,
    ParticipationResult, PowerLoadResult, RiskLevel, Severity, StatusBand,
    WaterDemandResult, ZoningResult,
)

WEIGHTS: dict[str, float] = {
    "zoning_score": 0.30,
    "water_power_score": 0.20,
    "drainage_green_score": 0.20,
    "public_hearing_score": 0.15,
    "amenity_density_score": 0.10,
    "network_load_score": 0.05,
}

VIOLATION_PENALTY = 25
RISK_PENALTIES: dict[RiskLevel, float] = {
    RiskLevel.HIGH: 80,
    RiskLevel.MEDIUM: 40,
    RiskLevel.LOW: 10,
}
HEARING_POINTS = 50
NEMA_POINTS = 30
FEEDBACK_POINTS = 20

CRITICAL_CAP = 50
GREEN_BAND_MIN = 70
YELLOW_BAND_MIN = 50

# No signal model exists yet for these two inputs
NEUTRAL_AUXILIARY_SCORE = 50.0


def zoning_score(zoning: ZoningResult) -> float:
    # Not floored: many violations can push this below zero
    if zoning.compliant:
        return 100.0
    return 100.0 - VIOLATION_PENALTY * len(zoning.violations)


def _exact_strain(result) -> float:
    # Results rebuilt from serialized output only carry the 2 dp value
    if result.unrounded_strain is not None:
        return result.unrounded_strain
    return result.strain_percentage


def water_power_score(water: WaterDemandResult, power: PowerLoadResult) -> float:
    return 100 - (_exact_strain(water) + _exact_strain(power)) / 2


def drainage_green_score(drainage: DrainageImpactResult, green_cover: GreenCoverResult) -> float:
    drainage_penalty = RISK_PENALTIES[drainage.risk_level]
    green_penalty = RISK_PENALTIES[green_cover.environmental_impact]
    return 100 - (drainage_penalty + green_penalty) / 2


def public_hearing_score(participation: ParticipationResult) -> float:
    return (
        (HEARING_POINTS if participation.public_hearing_held else 0)
        + (NEMA_POINTS if participation.nema_approval else 0)
        + (FEEDBACK_POINTS if participation.community_feedback_incorporated else 0)
    )


def status_band(score: float) -> StatusBand:
    if score >= GREEN_BAND_MIN:
        return StatusBand.GREEN
    if score >= YELLOW_BAND_MIN:
        return StatusBand.YELLOW
    return StatusBand.RED


def calculate_legitimacy_score(
    zoning: ZoningResult,
    water: WaterDemandResult,
    power: PowerLoadResult,
    drainage: DrainageImpactResult,
    green_cover: GreenCoverResult,
    participation: ParticipationResult,
    amenity_density_score: float = NEUTRAL_AUXILIARY_SCORE,
    network_load_score: float = NEUTRAL_AUXILIARY_SCORE,
) -> LegitimacyScore:
    """Combine every sub-score into one 0-100 legitimacy score."""
    components = {
        "zoning_score": zoning_score(zoning),
        "water_power_score": water_power_score(water, power),
        "drainage_green_score": drainage_green_score(drainage, green_cover),
        "public_hearing_score": public_hearing_score(participation),
        "amenity_density_score": float(amenity_density_score),
        "network_load_score": float(network_load_score),
    }
    overall = sum(WEIGHTS[name] * value for name, value in components.items())

    has_critical_violation = any(v.severity == Severity.HIGH for v in zoning.violations)
    capped = has_critical_violation or not participation.nema_approval
    if capped:
        overall = min(overall, CRITICAL_CAP)

    return LegitimacyScore(
        overall=min(100, max(0, to_int(overall))),
        components={name: to_int(value) for name, value in components.items()},
        status_band=status_band(overall),
        capped=capped,
    )
