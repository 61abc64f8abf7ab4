from __future__ import annotations

from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Severity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class StatusBand(str, Enum):
    GREEN = "Green"
    YELLOW = "Yellow"
    RED = "Red"


# ──────────────────────────────────────────────────────────────────
# INPUTS
# ──────────────────────────────────────────────────────────────────

# Upper bounds keep every downstream product finite
MAX_FLOORS_INPUT = 500
MAX_UNITS_INPUT = 100_000
MAX_AREA_M2 = 100_000_000.0

Area = Annotated[float, Field(ge=0, le=MAX_AREA_M2, allow_inf_nan=False)]


class UnitType(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    count: int = Field(0, ge=0, le=MAX_UNITS_INPUT)


class BuildingProfile(BaseModel):
    """Normalized description of a proposed development.

    Numeric fields left as None are treated as 0 by every calculator.
    """
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    name: Optional[str] = None
    location: Optional[str] = None
    floors: Optional[int] = Field(None, ge=0, le=MAX_FLOORS_INPUT)
    units: Optional[int] = Field(None, ge=0, le=MAX_UNITS_INPUT)
    unit_types: list[UnitType] = []
    amenities: list[str] = []
    parking_spaces: Optional[int] = Field(None, ge=0, le=MAX_UNITS_INPUT * 10)
    plot_size: Optional[Area] = None  # m²
    building_footprint: Optional[Area] = None  # m²
    surfaces: Optional[dict[str, Area]] = None  # surface kind -> m²
    existing_vegetation: Optional[dict[str, Area]] = None
    proposed_vegetation: Optional[dict[str, Area]] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)

    @field_validator("amenities")
    @classmethod
    def _dedupe_amenities(cls, value: list[str]) -> list[str]:
        seen: list[str] = []
        for amenity in value:
            if amenity not in seen:
                seen.append(amenity)
        return seen


class EvidenceRecord(BaseModel):
    """Verifiable public-process evidence and auxiliary sub-scores."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    public_hearing_held: bool = False
    nema_approval: bool = False
    community_feedback_incorporated: bool = False
    evidence_links: list[str] = []
    submitted_documents: list[str] = []
    amenity_density_score: float = Field(50.0, ge=0, le=100)
    network_load_score: float = Field(50.0, ge=0, le=100)


# ──────────────────────────────────────────────────────────────────
# DOMAIN IMPACTS
# ──────────────────────────────────────────────────────────────────

class DemandBreakdown(BaseModel):
    unit_based_demand: int = 0
    common_areas_demand: int = 0
    amenities_demand: int = 0


class WaterDemandResult(BaseModel):
    daily_demand_liters: int
    monthly_demand_liters: int
    monthly_demand_cubic_meters: int
    strain_percentage: float
    risk_level: RiskLevel
    breakdown: DemandBreakdown
    estimated_occupancy: int
    impact_score: int = 0
    # Full-precision strain for scoring; not serialized
    unrounded_strain: Optional[float] = Field(None, exclude=True)


class PowerLoadResult(BaseModel):
    daily_demand_kwh: int
    monthly_demand_kwh: int
    peak_demand_kw: float
    strain_percentage: float
    risk_level: RiskLevel
    breakdown: DemandBreakdown
    estimated_occupancy: int
    impact_score: int = 0
    # Full-precision strain for scoring; not serialized
    unrounded_strain: Optional[float] = Field(None, exclude=True)


class DrainageImpactResult(BaseModel):
    annual_runoff_liters: int
    peak_runoff_liters_per_second: float
    strain_percentage: float
    risk_level: RiskLevel
    flood_risk: RiskLevel
    weighted_runoff_coefficient: float
    additional_runoff_liters: int
    pre_development_runoff_liters: int
    surface_areas: dict[str, int] = {}
    total_area: int = 0
    surface_source: str = ""
    degenerate: bool = False  # zero total area, flows reported as 0


class GreenCoverResult(BaseModel):
    pre_development_green_cover: int
    post_development_green_cover: int
    green_cover_loss: int
    green_cover_loss_percentage: float
    environmental_impact: RiskLevel
    carbon_sequestration_loss: float
    biodiversity_impact_percentage: float
    temperature_increase: float
    pre_development_vegetation: dict[str, int] = {}
    post_development_vegetation: dict[str, int] = {}
    vegetation_source: str = ""
    degenerate: bool = False


# ──────────────────────────────────────────────────────────────────
# COMPLIANCE + SCORING
# ──────────────────────────────────────────────────────────────────

class ZoningViolation(BaseModel):
    type: str
    description: str
    severity: Severity


class ZoningResult(BaseModel):
    zone_type: str
    compliant: bool
    violations: list[ZoningViolation] = []
    documentation_complete: bool = False
    missing_documents: list[str] = []


class ParticipationResult(BaseModel):
    public_hearing_held: bool = False
    nema_approval: bool = False
    community_feedback_incorporated: bool = False
    evidence_links: list[str] = []
    missing_processes: list[str] = []


class LegitimacyScore(BaseModel):
    overall: int = Field(ge=0, le=100)
    components: dict[str, int] = {}
    status_band: StatusBand
    capped: bool = False  # High-severity violation or missing NEMA approval


class ImpactShadow(BaseModel):
    domain: str  # water, power, drainage, zoning
    radius: float = Field(ge=0)  # metres when rendered on a map
    intensity: Optional[str] = None


class AnalysisResult(BaseModel):
    water: WaterDemandResult
    power: PowerLoadResult
    drainage: DrainageImpactResult
    green_cover: GreenCoverResult
    zoning: ZoningResult
    participation: ParticipationResult
    legitimacy: LegitimacyScore
    shadows: list[ImpactShadow] = []
    recommendations: dict[str, list[str]] = {}

    def shadow_for(self, domain: str) -> Optional[ImpactShadow]:
        for shadow in self.shadows:
            if shadow.domain == domain:
                return shadow
        return None


# ──────────────────────────────────────────────────────────────────
# API
# ──────────────────────────────────────────────────────────────────

class AnalyzeRequest(BaseModel):
    profile: BuildingProfile
    evidence: Optional[EvidenceRecord] = None


class ProfileValidation(BaseModel):
    complete: bool
    missing_fields: list[str] = []


class AnalyzeResponse(BaseModel):
    analysis: AnalysisResult
    validation: ProfileValidation
    fingerprint: str
    shadow_geojson: Optional[dict] = None
    from_cache: bool = False
