import logging
from typing import Any

from app.config import settings
from app.services.geocoding_service import geocode_address
from engine.solar.models import (
    IrradianceSourceUnavailable,
    LocationPoint,
    SystemConfig,
    validate_location,
    validate_system_config,
)
from engine.solar.report import estimate_solar
from engine.weather.nrel_solar_resource import fetch_monthly_ghi

logger = logging.getLogger(__name__)


async def fetch_measured_radiation(lat: float, lon: float) -> list[float] | None:
    """Monthly GHI from NREL, or None when the lookup is disabled or fails.

    A None return tells the engine to fall back to its own estimate.
    """
    if not settings.irradiance_lookup_enabled:
        return None

    try:
        data = await fetch_monthly_ghi(
            lat,
            lon,
            api_key=settings.nrel_api_key,
            base_url=settings.nrel_base_url,
            timeout=settings.http_timeout_seconds,
        )
    except IrradianceSourceUnavailable as exc:
        logger.warning("Solar resource lookup failed, using estimate: %s", exc)
        return None

    return data["monthly"]


async def estimate_for_address(address: str, config: SystemConfig) -> dict[str, Any]:
    """Geocode, look up irradiance, and run the estimator for an address."""
    validate_system_config(config)

    geo = await geocode_address(address)
    location = geo.location
    validate_location(location.latitude, location.longitude)

    measured = await fetch_measured_radiation(location.latitude, location.longitude)

    report = estimate_solar(location, config, measured)
    report["geocoding_source"] = geo.source

    irradiance = "measured" if report["used_measured_data"] else "estimated"
    logger.info(
        "Estimate for %r (%s, %s): %.1f kWh/yr",
        address,
        geo.source,
        irradiance,
        report["annual_total_kwh"],
        extra={
            "geocoding_source": geo.source,
            "irradiance": irradiance,
            "annual_kwh": report["annual_total_kwh"],
        },
    )
    return report


def estimate_for_location(
    location: LocationPoint,
    config: SystemConfig,
    monthly_radiation: list[float] | None = None,
) -> dict[str, Any]:
    """Run the estimator for known coordinates without any network access."""
    validate_location(location.latitude, location.longitude)
    validate_system_config(config)
    return estimate_solar(location, config, monthly_radiation)
