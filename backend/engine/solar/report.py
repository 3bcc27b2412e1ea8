"""End-to-end estimate and display rounding.

Chains irradiance resolution, generation and impact into a single
report dict. This is the only place where numbers are rounded.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .constants import COORDINATE_DECIMALS, DISPLAY_DECIMALS
from .generation import GenerationResult, calculate_generation
from .impact import ImpactResult, calculate_impact
from .irradiance import IrradianceSeries, resolve_irradiance
from .models import LocationPoint, SystemConfig


def _r(value: float, ndigits: int = DISPLAY_DECIMALS) -> float:
    return round(float(value), ndigits)


def build_report(
    location: LocationPoint,
    config: SystemConfig,
    irradiance: IrradianceSeries,
    generation: GenerationResult,
    impact: ImpactResult,
) -> dict[str, Any]:
    """Flatten engine results into a display-ready dict."""
    radiation = [rec.radiation for rec in generation.monthly_records]
    average_radiation = sum(radiation) / len(radiation)

    return {
        "location": {
            "latitude": _r(location.latitude, COORDINATE_DECIMALS),
            "longitude": _r(location.longitude, COORDINATE_DECIMALS),
            "formatted_address": location.formatted_address,
        },
        "system": {
            "system_size_kw": config.system_size_kw,
            "electricity_price_per_kwh": config.electricity_price_per_kwh,
            "roof_angle_deg": config.roof_angle_deg,
            "orientation": config.orientation,
            "orientation_factor": _r(generation.orientation_factor),
            "angle_factor": _r(generation.angle_factor),
            "effective_system_size_kw": _r(generation.effective_system_size_kw),
        },
        "monthly": [
            {
                "month": rec.month_label,
                "radiation": _r(rec.radiation),
                "daily_generation_kwh": _r(rec.daily_generation_kwh),
                "monthly_generation_kwh": _r(rec.monthly_generation_kwh),
            }
            for rec in generation.monthly_records
        ],
        "annual_total_kwh": _r(generation.annual_total_kwh),
        "co2_offset_kg": _r(impact.co2_offset_kg),
        "annual_savings": _r(impact.annual_savings),
        "average_radiation": _r(average_radiation),
        "data_source": irradiance.source,
        "used_measured_data": irradiance.is_measured,
    }


def estimate_solar(
    location: LocationPoint,
    config: SystemConfig,
    measured: Sequence[float] | None = None,
) -> dict[str, Any]:
    """Run the full estimate for one site.

    ``measured`` is an optional 12-month irradiance series; pass ``None``
    to use the latitude/season estimate.
    """
    irradiance = resolve_irradiance(location.latitude, measured)
    generation = calculate_generation(irradiance, config)
    impact = calculate_impact(generation.annual_total_kwh, config.electricity_price_per_kwh)
    return build_report(location, config, irradiance, generation, impact)
