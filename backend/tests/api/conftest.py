"""API test infrastructure: async httpx client against the ASGI app.

Outbound calls are never made: OpenCage is disabled (no key), and tests
that reach the NREL lookup request ``nrel_unavailable`` or ``nrel_available``.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import settings
from engine.solar.models import IrradianceSourceUnavailable

NREL_PATCH_TARGET = "app.services.estimate_service.fetch_monthly_ghi"


@pytest.fixture(autouse=True)
def offline_settings(monkeypatch):
    monkeypatch.setattr(settings, "opencage_api_key", "")
    monkeypatch.setattr(settings, "irradiance_lookup_enabled", True)


@pytest.fixture
def nrel_unavailable():
    with patch(
        NREL_PATCH_TARGET,
        new=AsyncMock(side_effect=IrradianceSourceUnavailable("offline in tests")),
    ) as mock_fetch:
        yield mock_fetch


@pytest.fixture
def nrel_available(measured_ghi):
    with patch(
        NREL_PATCH_TARGET,
        new=AsyncMock(return_value={"monthly": measured_ghi, "annual": 4.53}),
    ) as mock_fetch:
        yield mock_fetch


@pytest_asyncio.fixture
async def app():
    from app.main import create_app

    application = create_app()

    from app.core.rate_limit import estimate_limiter
    estimate_limiter.reset()

    yield application


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def estimate_body() -> dict:
    return {
        "address": "350 5th Ave, New York, NY",
        "system_size_kw": 5,
        "electricity_price_per_kwh": 0.15,
        "roof_angle_deg": 30,
        "orientation": "south",
    }
