"""
Main impact analyzer: takes a BuildingProfile and produces an AnalysisResult.

Pipeline:
  - Water demand, power load, drainage and green cover (independent)
  - Zoning compliance and participation audit (independent)
  - Legitimacy score from all six results
  - Impact shadows from the impact results + zoning outcome
  - Mitigation recommendations per domain

Every step is a pure function of the profile and evidence, so the same
input always yields the same result.
"""

from __future__ import annotations

import logging
from typing import Optional

from infrashadows.impact_engine.drainage import (
    calculate_drainage_impact, get_drainage_mitigation_recommendations,
)
from infrashadows.impact_engine.green_cover import (
    calculate_green_cover_loss, get_green_cover_recommendations,
)
from infrashadows.impact_engine.legitimacy import calculate_legitimacy_score
from infrashadows.impact_engine.participation import audit_participation
from infrashadows.impact_engine.power import (
    calculate_power_load, get_power_conservation_recommendations,
)
from infrashadows.impact_engine.shadows import project_impact_shadows
from infrashadows.impact_engine.water import (
    calculate_water_demand, get_water_conservation_recommendations,
)
from infrashadows.impact_engine.zoning import ZoningRules, check_zoning_compliance
from infrashadows.models.schemas import (
    AnalysisResult, BuildingProfile, EvidenceRecord,
)

logger = logging.getLogger(__name__)


class ImpactAnalyzer:
    """Runs every calculator over one development profile."""

    def __init__(self, zoning_rules: Optional[ZoningRules] = None):
        self.zoning_rules = zoning_rules or ZoningRules.from_settings()

    def analyze(
        self,
        profile: BuildingProfile,
        evidence: Optional[EvidenceRecord] = None,
    ) -> AnalysisResult:
        """Full analysis: impacts, compliance, score and shadows."""
        evidence = evidence or EvidenceRecord()

        # ── Infrastructure impacts ──
        water = calculate_water_demand(profile)
        power = calculate_power_load(profile)
        drainage = calculate_drainage_impact(profile)
        green_cover = calculate_green_cover_loss(profile)

        # ── Compliance ──
        zoning = check_zoning_compliance(profile, evidence, self.zoning_rules)
        participation = audit_participation(evidence)

        legitimacy = calculate_legitimacy_score(
            zoning, water, power, drainage, green_cover, participation,
            amenity_density_score=evidence.amenity_density_score,
            network_load_score=evidence.network_load_score,
        )
        shadows = project_impact_shadows(water, power, drainage, zoning)

        logger.info(
            "Analyzed %s: legitimacy %s (%s), %d zoning violation(s)",
            profile.name or profile.location or "development",
            legitimacy.overall,
            legitimacy.status_band.value,
            len(zoning.violations),
        )

        return AnalysisResult(
            water=water,
            power=power,
            drainage=drainage,
            green_cover=green_cover,
            zoning=zoning,
            participation=participation,
            legitimacy=legitimacy,
            shadows=shadows,
            recommendations={
                "water": get_water_conservation_recommendations(water),
                "power": get_power_conservation_recommendations(power),
                "drainage": get_drainage_mitigation_recommendations(drainage),
                "green_cover": get_green_cover_recommendations(green_cover),
            },
        )


def analyze(
    profile: BuildingProfile,
    evidence: Optional[EvidenceRecord] = None,
) -> AnalysisResult:
    """Analyze a profile with the default zoning rules."""
    return ImpactAnalyzer().analyze(profile, evidence)
