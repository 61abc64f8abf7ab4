"""Tests for the HTTP API (Redis disabled)."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from infrashadows.config import settings
from infrashadows.main import app
from infrashadows.services import cache


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(settings, "redis_url", "")
    monkeypatch.setattr(cache, "_redis_client", None)
    return TestClient(app)


def _profile(**overrides) -> dict:
    profile = {
        "name": "Argwings Court",
        "location": "Kilimani, Nairobi",
        "floors": 12,
        "units": 48,
        "amenities": ["Swimming Pool", "Gym"],
        "plot_size": 3000,
        "building_footprint": 1000,
    }
    profile.update(overrides)
    return profile


class TestAnalyzeEndpoint:

    def test_analyze(self, client):
        resp = client.post("/api/v1/analyze", json={"profile": _profile()})
        assert resp.status_code == 200
        data = resp.json()
        assert data["from_cache"] is False
        assert len(data["fingerprint"]) == 64
        assert data["validation"]["complete"] is True
        assert data["analysis"]["zoning"]["violations"][0]["type"] == "Height"
        assert data["analysis"]["legitimacy"]["overall"] <= 50
        assert data["shadow_geojson"] is None

    def test_fingerprint_stable(self, client):
        body = {"profile": _profile(), "evidence": {"nema_approval": True}}
        first = client.post("/api/v1/analyze", json=body).json()
        second = client.post("/api/v1/analyze", json=body).json()
        assert first["fingerprint"] == second["fingerprint"]
        assert first["analysis"] == second["analysis"]

    def test_evidence_changes_fingerprint(self, client):
        a = client.post("/api/v1/analyze", json={"profile": _profile()}).json()
        b = client.post(
            "/api/v1/analyze",
            json={"profile": _profile(), "evidence": {"public_hearing_held": True}},
        ).json()
        assert a["fingerprint"] != b["fingerprint"]

    def test_shadow_geojson_with_coordinates(self, client):
        resp = client.post(
            "/api/v1/analyze",
            json={"profile": _profile(latitude=-1.2921, longitude=36.7830)},
        )
        geojson = resp.json()["shadow_geojson"]
        assert geojson["type"] == "FeatureCollection"
        assert len(geojson["features"]) == 4

    def test_incomplete_profile_reported(self, client):
        resp = client.post("/api/v1/analyze", json={"profile": {"units": 10}})
        assert resp.status_code == 200
        assert resp.json()["validation"]["missing_fields"] == ["floors", "location"]

    def test_strict_rejects_incomplete_profile(self, client):
        resp = client.post("/api/v1/analyze?strict=true", json={"profile": {"units": 10}})
        assert resp.status_code == 400
        assert resp.json()["detail"]["missing_fields"] == ["floors", "location"]

    def test_negative_units_rejected(self, client):
        resp = client.post("/api/v1/analyze", json={"profile": _profile(units=-5)})
        assert resp.status_code == 422


class TestInputBounds:

    def test_infinite_area_rejected(self, client):
        resp = client.post(
            "/api/v1/green-cover",
            content='{"plot_size": Infinity, "building_footprint": 100}',
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 422
        assert resp.json()["detail"][0]["loc"] == ["body", "plot_size"]

    def test_nan_area_rejected(self, client):
        resp = client.post(
            "/api/v1/analyze",
            content='{"profile": {"units": 10, "plot_size": NaN}}',
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 422

    def test_huge_units_rejected(self, client):
        resp = client.post("/api/v1/analyze", json={"profile": _profile(units=10**400)})
        assert resp.status_code == 422

    def test_negative_surface_area_rejected(self, client):
        resp = client.post(
            "/api/v1/drainage-impact",
            json={"surfaces": {"roof": 100, "grass": -99}},
        )
        assert resp.status_code == 422

    def test_negative_vegetation_area_rejected(self, client):
        resp = client.post(
            "/api/v1/green-cover",
            json={"plot_size": 1000, "proposed_vegetation": {"trees": -10}},
        )
        assert resp.status_code == 422

    def test_infinite_evidence_score_rejected(self, client):
        resp = client.post(
            "/api/v1/analyze",
            content='{"profile": {"units": 10}, "evidence": {"network_load_score": Infinity}}',
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 422


class TestDomainEndpoints:

    def test_water_demand(self, client):
        resp = client.post("/api/v1/water-demand", json={"units": 48})
        assert resp.status_code == 200
        assert resp.json()["daily_demand_liters"] == 20400
        assert resp.json()["risk_level"] == "Low"

    def test_power_load(self, client):
        resp = client.post("/api/v1/power-load", json={"units": 48})
        assert resp.json()["daily_demand_kwh"] == 478

    def test_drainage_impact(self, client):
        resp = client.post("/api/v1/drainage-impact", json={"surfaces": {}})
        assert resp.json()["degenerate"] is True

    def test_green_cover(self, client):
        resp = client.post("/api/v1/green-cover", json={"plot_size": 3000, "building_footprint": 1000})
        assert resp.json()["green_cover_loss_percentage"] == pytest.approx(80)

    def test_validate(self, client):
        resp = client.post("/api/v1/validate", json={"floors": 4, "units": 8, "location": "Kilimani"})
        assert resp.json() == {"complete": True, "missing_fields": []}


class TestServiceEndpoints:

    def test_root(self, client):
        data = client.get("/").json()
        assert data["area"] == "Kilimani, Nairobi"

    def test_health_without_redis(self, client):
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["redis"] == "not configured"
