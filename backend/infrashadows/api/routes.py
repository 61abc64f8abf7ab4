from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query

from infrashadows.impact_engine.analyzer import ImpactAnalyzer
from infrashadows.impact_engine.drainage import calculate_drainage_impact
from infrashadows.impact_engine.green_cover import calculate_green_cover_loss
from infrashadows.impact_engine.power import calculate_power_load
from infrashadows.impact_engine.shadows import shadows_to_geojson
from infrashadows.impact_engine.validation import (
    MissingInputError, ensure_complete, validate_profile,
)
from infrashadows.impact_engine.water import calculate_water_demand
from infrashadows.impact_engine.zoning import ZoningRules
from infrashadows.models.schemas import (
    AnalysisResult, AnalyzeRequest, AnalyzeResponse, BuildingProfile,
    DrainageImpactResult, GreenCoverResult, PowerLoadResult,
    ProfileValidation, WaterDemandResult,
)
from infrashadows.services.cache import (
    get_cached_analysis, profile_fingerprint, set_cached_analysis,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")
analyzer = ImpactAnalyzer(ZoningRules.from_settings())


@router.post("/v1/analyze", response_model=AnalyzeResponse)
async def analyze_development(
    request: AnalyzeRequest,
    strict: bool = Query(False, description="Reject profiles missing floors, units or location"),
):
    """Run the full impact and legitimacy analysis for one development."""
    profile = request.profile
    if strict:
        try:
            ensure_complete(profile)
        except MissingInputError as e:
            raise HTTPException(
                status_code=400,
                detail={"message": str(e), "missing_fields": e.missing_fields},
            )

    fingerprint = profile_fingerprint(profile, request.evidence)

    from_cache = False
    cached = await get_cached_analysis(fingerprint)
    if cached:
        logger.info("Analysis cache hit for %s", fingerprint[:12])
        analysis = AnalysisResult.model_validate(cached)
        from_cache = True
    else:
        analysis = analyzer.analyze(profile, request.evidence)
        await set_cached_analysis(fingerprint, analysis.model_dump(mode="json"))

    shadow_geojson = None
    if profile.latitude is not None and profile.longitude is not None:
        shadow_geojson = shadows_to_geojson(analysis.shadows, profile.latitude, profile.longitude)

    return AnalyzeResponse(
        analysis=analysis,
        validation=validate_profile(profile),
        fingerprint=fingerprint,
        shadow_geojson=shadow_geojson,
        from_cache=from_cache,
    )


@router.post("/v1/validate", response_model=ProfileValidation)
async def validate(profile: BuildingProfile):
    """Report which required fields a profile is missing."""
    return validate_profile(profile)


# ──────────────────────────────────────────────────────────────────
# SINGLE-DOMAIN CALCULATIONS
# ──────────────────────────────────────────────────────────────────

@router.post("/v1/water-demand", response_model=WaterDemandResult)
async def water_demand(profile: BuildingProfile):
    return calculate_water_demand(profile)


@router.post("/v1/power-load", response_model=PowerLoadResult)
async def power_load(profile: BuildingProfile):
    return calculate_power_load(profile)


@router.post("/v1/drainage-impact", response_model=DrainageImpactResult)
async def drainage_impact(profile: BuildingProfile):
    return calculate_drainage_impact(profile)


@router.post("/v1/green-cover", response_model=GreenCoverResult)
async def green_cover(profile: BuildingProfile):
    return calculate_green_cover_loss(profile)
