from __future__ import annotations

from infrashadows.impact_engine.analyzer import ImpactAnalyzer, analyze

__all__ = ["ImpactAnalyzer", "analyze"]
