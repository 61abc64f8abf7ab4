"""
Risk classification and output rounding shared by every impact calculator.

Strain and loss percentages are classified on a 30/60 scale:
  - Low:    value <= 30
  - Medium: 30 < value <= 60
  - High:   value > 60

Drainage additionally carries a flood-risk label on a wider scale
(> 100 High, > 70 Medium), evaluated on the same strain value.
"""

from __future__ import annotations

import math

from infrashadows.models.schemas import RiskLevel

RISK_THRESHOLDS = {
    "low": 30,
    "medium": 60,
}

FLOOD_RISK_THRESHOLDS = {
    "high": 100,
    "medium": 70,
}


def classify_risk(value: float) -> RiskLevel:
    """Map a strain/loss percentage to Low/Medium/High (inclusive upper bounds)."""
    if value <= RISK_THRESHOLDS["low"]:
        return RiskLevel.LOW
    if value <= RISK_THRESHOLDS["medium"]:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def classify_flood_risk(strain_percentage: float) -> RiskLevel:
    """Flood risk uses strict lower bounds: >100 High, >70 Medium."""
    if strain_percentage > FLOOD_RISK_THRESHOLDS["high"]:
        return RiskLevel.HIGH
    if strain_percentage > FLOOD_RISK_THRESHOLDS["medium"]:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round halves away from zero for positives (2.5 -> 3), unlike round()."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def to_int(value: float) -> int:
    return int(round_half_up(value))


def safe_ratio(numerator: float, denominator: float) -> tuple[float, bool]:
    """Return (numerator / denominator, degenerate).

    A zero denominator yields (0.0, True) so downstream percentages stay
    comparable numbers instead of NaN/Infinity.
    """
    if not denominator:
        return 0.0, True
    return numerator / denominator, False
