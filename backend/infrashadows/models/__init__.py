from __future__ import annotations

from infrashadows.models.schemas import (
    AnalysisResult,
    BuildingProfile,
    EvidenceRecord,
    RiskLevel,
    Severity,
    StatusBand,
    UnitType,
)

__all__ = [
    "AnalysisResult",
    "BuildingProfile",
    "EvidenceRecord",
    "RiskLevel",
    "Severity",
    "StatusBand",
    "UnitType",
]
