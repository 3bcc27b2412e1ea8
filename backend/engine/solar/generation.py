"""
Monthly and annual energy generation for a rooftop PV system.

The model is deliberately simple::

    effective_kw = size_kw * orientation_factor * angle_factor
    daily_kwh    = effective_kw * radiation * SYSTEM_EFFICIENCY
    monthly_kwh  = daily_kwh * days_in_month

Values are kept at full float precision; rounding belongs to the report
layer (:mod:`engine.solar.report`).
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .constants import (
    ANGLE_LOSS_PER_DEGREE,
    DAYS_IN_MONTH,
    DEFAULT_ORIENTATION_FACTOR,
    MIN_ANGLE_FACTOR,
    MONTH_LABELS,
    OPTIMAL_ROOF_ANGLE_DEG,
    ORIENTATION_FACTORS,
    SYSTEM_EFFICIENCY,
)
from .irradiance import IrradianceSeries
from .models import SystemConfig


@dataclass(frozen=True)
class MonthlyRecord:
    month_label: str
    radiation: float  # kWh/m²/day
    daily_generation_kwh: float
    monthly_generation_kwh: float


@dataclass(frozen=True)
class GenerationResult:
    """Twelve monthly records plus the annual sum."""

    monthly_records: tuple[MonthlyRecord, ...]
    annual_total_kwh: float
    orientation_factor: float
    angle_factor: float
    effective_system_size_kw: float


def orientation_factor(orientation: str) -> float:
    """Fraction of south-facing output for a roof orientation.

    Unrecognised orientations are treated as optimal (1.0).
    """
    return ORIENTATION_FACTORS.get(str(orientation).lower(), DEFAULT_ORIENTATION_FACTOR)


def angle_factor(roof_angle_deg: float) -> float:
    """Tilt efficiency: 1% loss per degree away from 30°, floored at 70%.

    The optimum is fixed and does not follow latitude.
    """
    deviation = abs(roof_angle_deg - OPTIMAL_ROOF_ANGLE_DEG)
    return max(1.0 - deviation * ANGLE_LOSS_PER_DEGREE, MIN_ANGLE_FACTOR)


def calculate_generation(
    irradiance: IrradianceSeries,
    config: SystemConfig,
    efficiency: float = SYSTEM_EFFICIENCY,
) -> GenerationResult:
    """Convert a monthly irradiance series into energy output.

    Parameters
    ----------
    irradiance : MeasuredIrradiance | EstimatedIrradiance
        12 monthly values in kWh/m²/day, January first.
    config : SystemConfig
        System size, roof tilt and orientation. Assumed already validated.
    efficiency : float
        Combined panel/inverter derate.

    Returns
    -------
    GenerationResult
    """
    o_factor = orientation_factor(config.orientation)
    a_factor = angle_factor(config.roof_angle_deg)
    effective_kw = config.system_size_kw * o_factor * a_factor

    radiation = irradiance.as_array()
    days = np.asarray(DAYS_IN_MONTH, dtype=np.float64)

    daily = effective_kw * radiation * efficiency
    monthly = daily * days

    records = tuple(
        MonthlyRecord(
            month_label=MONTH_LABELS[m],
            radiation=float(radiation[m]),
            daily_generation_kwh=float(daily[m]),
            monthly_generation_kwh=float(monthly[m]),
        )
        for m in range(len(MONTH_LABELS))
    )

    annual_total = 0.0
    for record in records:
        annual_total += record.monthly_generation_kwh

    return GenerationResult(
        monthly_records=records,
        annual_total_kwh=annual_total,
        orientation_factor=o_factor,
        angle_factor=a_factor,
        effective_system_size_kw=effective_kw,
    )
