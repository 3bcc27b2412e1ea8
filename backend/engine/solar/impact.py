"""Environmental and financial impact of annual solar generation."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import GRID_EMISSION_FACTOR_KG_PER_KWH


@dataclass(frozen=True)
class ImpactResult:
    co2_offset_kg: float
    annual_savings: float  # in the caller's currency


def calculate_impact(
    annual_total_kwh: float,
    electricity_price_per_kwh: float,
    emission_factor: float = GRID_EMISSION_FACTOR_KG_PER_KWH,
) -> ImpactResult:
    """Grid CO2 avoided and bill savings for one year of generation."""
    return ImpactResult(
        co2_offset_kg=annual_total_kwh * emission_factor,
        annual_savings=annual_total_kwh * electricity_price_per_kwh,
    )
