"""
Tests de integración — endpoints /api/nasa/earthdata.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from earthproxy.core.config import settings
from earthproxy.main import app
from earthproxy.routers.earthdata import HEALTH_MESSAGE, get_estimator
from earthproxy.services.estimator import Estimator
from earthproxy.services.resolver import Provenance, SourceResolver

from .conftest import FIXED_NOW

RESPONSE_KEYS = {
    "latitude", "longitude", "ndvi", "landSurfaceTemperature", "evapotranspiration",
    "vegetationStatus", "temperatureStatus", "droughtRisk", "timestamp", "dataSource",
}


@pytest.fixture
def client():
    app.dependency_overrides[get_estimator] = lambda: Estimator(SourceResolver(None, None), clock=lambda: FIXED_NOW)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


class TestEarthDataEndpoint:

    def test_ok(self, client):
        r = client.get("/api/nasa/earthdata", params={"lat": 41.4, "lon": 2.17})
        assert r.status_code == 200
        body = r.json()
        assert RESPONSE_KEYS <= set(body)
        assert body["latitude"] == 41.4
        assert body["longitude"] == 2.17
        assert body["dataSource"] == Provenance.MODEL.value
        assert body["timestamp"] == "2024-06-20T12:00:00Z"
        assert 0.0 <= body["ndvi"] <= 0.95
        assert 0.5 <= body["evapotranspiration"] <= 8.0
        assert body["droughtRisk"] in {"High risk", "Moderate risk", "Low risk"}

    def test_seed_reproducible(self, client):
        params = {"lat": -1.3, "lon": 36.8, "seed": 123}
        a = client.get("/api/nasa/earthdata", params=params).json()
        b = client.get("/api/nasa/earthdata", params=params).json()
        assert a == b

    def test_when_sets_season(self, client):
        params = {"lat": 45, "lon": 0, "seed": 1}
        jul = client.get("/api/nasa/earthdata", params={**params, "when": "2023-07-15T00:00:00Z"}).json()
        jan = client.get("/api/nasa/earthdata", params={**params, "when": "2023-01-15T00:00:00Z"}).json()
        # misma semilla, mismo ruido: solo cambia el ajuste estacional (±8 °C)
        assert jul["landSurfaceTemperature"] - jan["landSurfaceTemperature"] == pytest.approx(16.0, abs=0.11)

    @pytest.mark.parametrize("lat,lon", [(90, 180), (-90, -180)])
    def test_extremes(self, client, lat, lon):
        r = client.get("/api/nasa/earthdata", params={"lat": lat, "lon": lon})
        assert r.status_code == 200

    @pytest.mark.parametrize("params", [
        {"lat": 10},
        {"lon": 10},
        {},
        {"lat": "abc", "lon": 10},
        {"lat": 10, "lon": ""},
        {"lat": 91, "lon": 0},
        {"lat": 0, "lon": -180.5},
        {"lat": "nan", "lon": 0},
        {"lat": 0, "lon": 0, "when": "yesterday"},
        {"lat": 0, "lon": 0, "when": "0001-01-01T00:00:00+01:00"},
        {"lat": 0, "lon": 0, "when": "0001-01-05T00:00:00Z"},
        {"lat": 0, "lon": 0, "seed": -1},
        {"lat": 0, "lon": 0, "seed": "x"},
    ])
    def test_bad_request(self, client, params):
        r = client.get("/api/nasa/earthdata", params=params)
        assert r.status_code == 400

    def test_validation_error_body(self, client):
        r = client.get("/api/nasa/earthdata", params={"lat": 0, "lon": 0, "seed": "x"})
        detail = r.json()["detail"]
        assert detail[0]["loc"] == ["query", "seed"]
        assert detail[0]["msg"]

    def test_internal_error(self, client):
        broken = MagicMock()
        broken.estimate = AsyncMock(side_effect=RuntimeError("boom"))
        app.dependency_overrides[get_estimator] = lambda: broken
        r = client.get("/api/nasa/earthdata", params={"lat": 1, "lon": 1})
        assert r.status_code == 500
        assert r.json() == {"detail": "Internal server error"}


class TestHealthAndSources:

    def test_health(self, client):
        r = client.get("/api/nasa/earthdata/health")
        assert r.status_code == 200
        assert r.text == HEALTH_MESSAGE
        assert r.headers["content-type"].startswith("text/plain")

    def test_sources(self, client):
        r = client.get("/api/nasa/earthdata/sources", params={"lat": 10, "lon": 20, "when": "2024-06-20"})
        assert r.status_code == 200
        body = r.json()
        assert body["location"] == {"lat": 10.0, "lon": 20.0}
        assert [s["indicator"] for s in body["sources"]] == ["ndvi", "land_surface_temperature", "evapotranspiration"]
        assert "2024-06-04" in body["sources"][0]["url"]

    def test_sources_requires_coordinates(self, client):
        assert client.get("/api/nasa/earthdata/sources", params={"lat": 10}).status_code == 400

    @pytest.mark.parametrize("when", ["0001-01-05T00:00:00Z", "0001-01-01T00:00:00+01:00", "soon"])
    def test_sources_bad_when(self, client, when):
        r = client.get("/api/nasa/earthdata/sources", params={"lat": 10, "lon": 20, "when": when})
        assert r.status_code == 400

    def test_sources_body_has_no_extra_fields(self, client):
        body = client.get("/api/nasa/earthdata/sources", params={"lat": 10, "lon": 20}).json()
        assert set(body) == {"location", "timestamp", "sources"}

    def test_lst_snapshot_size_from_settings(self, client, monkeypatch):
        monkeypatch.setattr(settings, "snapshot_size_px", 256)
        body = client.get("/api/nasa/earthdata/sources", params={"lat": 10, "lon": 20}).json()
        assert "WIDTH=256&HEIGHT=256" in body["sources"][1]["url"]

    def test_root(self, client):
        r = client.get("/")
        assert r.status_code == 200
        assert r.json()["message"] == "OK"


def test_sources_bbox_clipped_at_pole(client):
    r = client.get("/api/nasa/earthdata/sources", params={"lat": 90, "lon": 0})
    lst_url = r.json()["sources"][1]["url"]
    assert "BBOX=89.8,-0.2,90.0,0.2" in lst_url
