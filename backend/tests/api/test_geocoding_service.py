"""Tests for the geocoding service (OpenCage mocked with httpx.MockTransport)."""

from __future__ import annotations

import httpx
import pytest

from app.config import settings
from app.services.geocoding_service import (
    CITY_COORDINATES,
    fallback_geocode,
    geocode_address,
)

pytestmark = pytest.mark.asyncio


def _opencage(results: list[dict], status_code: int = 200, seen: list | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json={"results": results, "status": {"code": status_code}})

    return httpx.MockTransport(handler)


@pytest.fixture
def opencage_key(monkeypatch):
    monkeypatch.setattr(settings, "opencage_api_key", "test-key")


class TestFallbackGeocode:
    async def test_city_match_case_insensitive(self):
        result = fallback_geocode("123 Main St, SEATTLE, WA")
        assert result.source == "city_table"
        assert (result.location.latitude, result.location.longitude) == CITY_COORDINATES["seattle"]
        assert result.location.formatted_address == "123 Main St, SEATTLE, WA"

    async def test_default_point(self):
        result = fallback_geocode("Reykjavik")
        assert result.source == "default"
        assert result.location.latitude == settings.fallback_latitude
        assert result.location.longitude == settings.fallback_longitude

    async def test_all_table_entries_valid(self):
        for lat, lng in CITY_COORDINATES.values():
            assert -90 <= lat <= 90
            assert -180 <= lng <= 180


class TestGeocodeAddress:
    async def test_no_key_skips_network(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("network should not be used without a key")

        result = await geocode_address("Miami, FL", transport=httpx.MockTransport(handler))
        assert result.source == "city_table"

    async def test_opencage_success(self, opencage_key):
        seen: list[httpx.Request] = []
        transport = _opencage(
            [{"geometry": {"lat": 51.5074, "lng": -0.1278}, "formatted": "London, United Kingdom"}],
            seen=seen,
        )
        result = await geocode_address("London", transport=transport)

        assert result.source == "opencage"
        assert result.location.latitude == 51.5074
        assert result.location.longitude == -0.1278
        assert result.location.formatted_address == "London, United Kingdom"
        assert seen[0].url.params["q"] == "London"
        assert seen[0].url.params["key"] == "test-key"

    async def test_no_results_falls_back(self, opencage_key):
        result = await geocode_address("Boston", transport=_opencage([]))
        assert result.source == "city_table"
        assert result.location.latitude == CITY_COORDINATES["boston"][0]

    async def test_http_error_falls_back(self, opencage_key):
        result = await geocode_address("Denver", transport=_opencage([], status_code=402))
        assert result.source == "city_table"

    async def test_malformed_result_falls_back(self, opencage_key):
        result = await geocode_address("Nowhere", transport=_opencage([{"formatted": "no geometry"}]))
        assert result.source == "default"

    async def test_out_of_range_result_falls_back(self, opencage_key):
        transport = _opencage([{"geometry": {"lat": 123.0, "lng": 0.0}, "formatted": "bad"}])
        result = await geocode_address("Chicago", transport=transport)
        assert result.source == "city_table"
