"""
Zoning compliance against the study area's height and density limits.

Violations:
  - Height:  floors above max_floors  -> High severity
  - Density: units above max_units    -> Medium severity

Documentation completeness is checked against the documents actually
submitted in the evidence record.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from infrashadows.config import settings
from infrashadows.models.schemas import (
    BuildingProfile, EvidenceRecord, Severity, ZoningResult, ZoningViolation,
)


@dataclass(frozen=True)
class ZoningRules:
    zone_type: str = "R3 - High Density Residential"
    max_floors: int = 10
    max_units: int = 80
    required_documents: tuple[str, ...] = (
        "LPDP Submission",
        "Traffic Impact Assessment",
    )

    @classmethod
    def from_settings(cls) -> "ZoningRules":
        return cls(
            zone_type=settings.zone_type,
            max_floors=settings.max_floors,
            max_units=settings.max_units,
            required_documents=tuple(settings.required_documents),
        )


def find_missing_documents(
    required: tuple[str, ...],
    submitted: list[str],
) -> list[str]:
    """Required documents not in the submitted list (case-insensitive)."""
    submitted_keys = {doc.strip().lower() for doc in submitted}
    return [doc for doc in required if doc.lower() not in submitted_keys]


def check_zoning_compliance(
    profile: BuildingProfile,
    evidence: Optional[EvidenceRecord] = None,
    rules: Optional[ZoningRules] = None,
) -> ZoningResult:
    rules = rules or ZoningRules.from_settings()
    evidence = evidence or EvidenceRecord()
    floors = profile.floors or 0
    units = profile.units or 0

    violations: list[ZoningViolation] = []
    if floors > rules.max_floors:
        violations.append(ZoningViolation(
            type="Height",
            description=(
                f"Exceeds maximum allowed height of {rules.max_floors} floors "
                f"by {floors - rules.max_floors} floors"
            ),
            severity=Severity.HIGH,
        ))

    if units > rules.max_units:
        violations.append(ZoningViolation(
            type="Density",
            description=(
                f"Exceeds maximum allowed units of {rules.max_units} "
                f"by {units - rules.max_units} units"
            ),
            severity=Severity.MEDIUM,
        ))

    missing = find_missing_documents(rules.required_documents, evidence.submitted_documents)

    return ZoningResult(
        zone_type=rules.zone_type,
        compliant=len(violations) == 0,
        violations=violations,
        documentation_complete=not missing,
        missing_documents=missing,
    )
