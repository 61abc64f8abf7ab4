#!/usr/bin/env python3
"""
Run the InfraShadows impact engine over sample Kilimani developments.

Prints each development's impacts, zoning verdict and legitimacy score for
manual review. Can be run against the live API or by importing the engine.

Usage:
    # Against live API:
    python3 scripts/validate_sample_developments.py --api http://localhost:8000

    # Direct import (no server needed):
    python3 scripts/validate_sample_developments.py
"""

from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from datetime import datetime

# Add backend to path for direct import mode
SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
BACKEND_DIR = os.path.join(os.path.dirname(SCRIPT_DIR), "backend")
sys.path.insert(0, BACKEND_DIR)

# ──────────────────────────────────────────────────────────────────
# SAMPLE DEVELOPMENTS
# ──────────────────────────────────────────────────────────────────

SAMPLES = [
    {
        "name": "Mid-rise within limits",
        "profile": {
            "name": "Lenana Gardens",
            "location": "Kilimani, Nairobi",
            "floors": 8,
            "units": 48,
            "amenities": ["Swimming Pool", "Gym", "Elevator"],
            "plot_size": 3000,
            "building_footprint": 1000,
            "latitude": -1.2921,
            "longitude": 36.7830,
        },
        "evidence": {
            "public_hearing_held": True,
            "nema_approval": True,
            "community_feedback_incorporated": True,
            "submitted_documents": ["LPDP Submission", "Traffic Impact Assessment"],
        },
        "verify": [
            "Compliant zoning",
            "Green status band",
            "Drainage risk Medium (~33% strain)",
        ],
    },
    {
        "name": "Tower over height limit",
        "profile": {
            "name": "Argwings Tower",
            "location": "Kilimani, Nairobi",
            "floors": 18,
            "units": 120,
            "unit_types": [
                {"type": "Studio", "count": 40},
                {"type": "2 Bedroom", "count": 60},
                {"type": "3 Bedroom Penthouse", "count": 20},
            ],
            "amenities": ["Swimming Pool", "Gym", "Central Air Conditioning"],
            "plot_size": 2500,
            "building_footprint": 1800,
        },
        "evidence": {"public_hearing_held": True, "nema_approval": True},
        "verify": [
            "Height + density violations",
            "Score capped at 50",
            "Penthouse occupancy 4.0 (last match)",
        ],
    },
    {
        "name": "Sparse listing",
        "profile": {"units": 30},
        "evidence": None,
        "verify": [
            "Missing floors + location reported",
            "Degenerate drainage/green cover (no site area)",
        ],
    },
]


# ──────────────────────────────────────────────────────────────────
# DIRECT MODE
# ──────────────────────────────────────────────────────────────────

def run_direct_analysis(sample: dict) -> dict:
    """Run analysis by importing the engine directly."""
    from infrashadows.impact_engine.analyzer import ImpactAnalyzer
    from infrashadows.impact_engine.validation import validate_profile
    from infrashadows.impact_engine.zoning import ZoningRules
    from infrashadows.models.schemas import BuildingProfile, EvidenceRecord

    profile = BuildingProfile(**sample["profile"])
    evidence = EvidenceRecord(**sample["evidence"]) if sample["evidence"] else None

    analysis = ImpactAnalyzer(ZoningRules.from_settings()).analyze(profile, evidence)
    return {
        "analysis": analysis.model_dump(mode="json"),
        "validation": validate_profile(profile).model_dump(mode="json"),
    }


# ──────────────────────────────────────────────────────────────────
# API MODE
# ──────────────────────────────────────────────────────────────────

async def run_api_analysis(sample: dict, api_base: str) -> dict:
    """Run analysis via the HTTP API."""
    import httpx
    body = {"profile": sample["profile"]}
    if sample["evidence"]:
        body["evidence"] = sample["evidence"]
    async with httpx.AsyncClient(timeout=30) as client:
        resp = await client.post(f"{api_base}/api/v1/analyze", json=body)
        if resp.status_code != 200:
            return {"error": f"API returned {resp.status_code}: {resp.text[:500]}"}
        return resp.json()


# ──────────────────────────────────────────────────────────────────
# OUTPUT FORMATTING
# ──────────────────────────────────────────────────────────────────

def format_result(sample: dict, result: dict) -> str:
    """Format a single sample result for console output."""
    lines = []
    lines.append(f"\n{'='*70}")
    lines.append(f"SAMPLE: {sample['name']}")
    lines.append(f"{'='*70}")

    if "error" in result:
        lines.append(f"  ERROR: {result['error']}")
        return "\n".join(lines)

    analysis = result["analysis"]
    water = analysis["water"]
    power = analysis["power"]
    drainage = analysis["drainage"]
    green = analysis["green_cover"]
    zoning = analysis["zoning"]
    legitimacy = analysis["legitimacy"]

    lines.append(f"  Water:     {water['daily_demand_liters']:,} L/day, "
                 f"{water['strain_percentage']}% strain ({water['risk_level']})")
    lines.append(f"  Power:     {power['daily_demand_kwh']:,} kWh/day, "
                 f"peak {power['peak_demand_kw']} kW ({power['risk_level']})")
    lines.append(f"  Drainage:  {drainage['peak_runoff_liters_per_second']} L/s peak, "
                 f"{drainage['strain_percentage']}% strain ({drainage['risk_level']}, "
                 f"flood {drainage['flood_risk']})")
    lines.append(f"  Green:     {green['green_cover_loss']:,} m² lost "
                 f"({green['green_cover_loss_percentage']}%, {green['environmental_impact']})")

    if zoning["violations"]:
        for v in zoning["violations"]:
            lines.append(f"  Violation: [{v['severity']}] {v['description']}")
    else:
        lines.append(f"  Zoning:    compliant ({zoning['zone_type']})")

    lines.append(f"  Score:     {legitimacy['overall']} ({legitimacy['status_band']})"
                 f"{' [capped]' if legitimacy['capped'] else ''}")
    lines.append(f"  Components: {json.dumps(legitimacy['components'])}")

    missing = result.get("validation", {}).get("missing_fields") or []
    if missing:
        lines.append(f"  Missing:   {', '.join(missing)}")

    lines.append("\n  VERIFY:")
    for item in sample.get("verify", []):
        lines.append(f"    [ ] {item}")

    return "\n".join(lines)


async def main():
    parser = argparse.ArgumentParser(description="Run the impact engine over sample developments")
    parser.add_argument("--api", default=None, help="API base URL (e.g., http://localhost:8000)")
    parser.add_argument("--samples", nargs="*", type=int, help="Run specific sample numbers (1-indexed)")
    args = parser.parse_args()

    print("\nInfraShadows Impact Engine Validation")
    print(f"Date: {datetime.now().strftime('%Y-%m-%d %H:%M')}")
    print(f"Mode: {'API (' + args.api + ')' if args.api else 'Direct import'}")

    samples = SAMPLES
    if args.samples:
        samples = [SAMPLES[i - 1] for i in args.samples if 0 < i <= len(SAMPLES)]

    for sample in samples:
        if args.api:
            result = await run_api_analysis(sample, args.api)
        else:
            result = run_direct_analysis(sample)
        print(format_result(sample, result))


if __name__ == "__main__":
    asyncio.run(main())
