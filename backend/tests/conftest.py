"""Shared test fixtures for solar estimator engine and API tests."""

from __future__ import annotations

import pytest

from engine.solar.models import LocationPoint, SystemConfig


# ======================================================================
# Location fixtures
# ======================================================================

@pytest.fixture
def new_york() -> LocationPoint:
    return LocationPoint(40.7128, -74.0060, "New York, NY, USA")


@pytest.fixture
def sydney() -> LocationPoint:
    """Southern-hemisphere site with roughly the same |latitude| band."""
    return LocationPoint(-33.8688, 151.2093, "Sydney NSW, Australia")


# ======================================================================
# System fixtures
# ======================================================================

@pytest.fixture
def south_config() -> SystemConfig:
    """5 kW south-facing roof at the optimal 30° tilt, $0.15/kWh."""
    return SystemConfig(
        system_size_kw=5.0,
        electricity_price_per_kwh=0.15,
        roof_angle_deg=30,
        orientation="south",
    )


# ======================================================================
# Irradiance fixtures
# ======================================================================

@pytest.fixture
def measured_ghi() -> list[float]:
    """Monthly GHI resembling a mid-latitude US site (kWh/m²/day)."""
    return [2.55, 3.42, 4.53, 5.44, 6.11, 6.52, 6.48, 5.84, 4.87, 3.71, 2.66, 2.19]


@pytest.fixture
def nrel_payload(measured_ghi) -> dict:
    """Solar Resource API v1 JSON body carrying ``measured_ghi``."""
    keys = ["jan", "feb", "mar", "apr", "may", "jun",
            "jul", "aug", "sep", "oct", "nov", "dec"]
    monthly = dict(zip(keys, measured_ghi))
    return {
        "version": "1.0.0",
        "errors": [],
        "inputs": {"lat": "40.7128", "lon": "-74.006"},
        "outputs": {
            "avg_dni": {"annual": 4.2, "monthly": {k: 4.0 for k in keys}},
            "avg_ghi": {"annual": 4.53, "monthly": monthly},
            "avg_lat_tilt": {"annual": 5.1, "monthly": {k: 5.0 for k in keys}},
        },
    }
