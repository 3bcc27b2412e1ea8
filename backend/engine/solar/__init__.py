"""
Solar estimation engine.

Provides a monthly irradiance resolver (measured data or a latitude/season
estimate), a rooftop generation model with orientation and tilt factors,
and CO2/savings impact figures. All functions are pure and stateless.
"""

from .irradiance import (
    EstimatedIrradiance,
    IrradianceSeries,
    MeasuredIrradiance,
    MonthlyIrradiance,
    estimate_monthly_radiation,
    resolve_irradiance,
)
from .generation import (
    GenerationResult,
    MonthlyRecord,
    angle_factor,
    calculate_generation,
    orientation_factor,
)
from .impact import ImpactResult, calculate_impact
from .models import (
    InvalidLocation,
    InvalidSystemConfig,
    IrradianceSourceUnavailable,
    LocationPoint,
    Orientation,
    SystemConfig,
    validate_location,
    validate_system_config,
)
from .report import build_report, estimate_solar

__all__ = [
    # irradiance
    "EstimatedIrradiance",
    "IrradianceSeries",
    "MeasuredIrradiance",
    "MonthlyIrradiance",
    "estimate_monthly_radiation",
    "resolve_irradiance",
    # generation
    "GenerationResult",
    "MonthlyRecord",
    "angle_factor",
    "calculate_generation",
    "orientation_factor",
    # impact
    "ImpactResult",
    "calculate_impact",
    # models
    "InvalidLocation",
    "InvalidSystemConfig",
    "IrradianceSourceUnavailable",
    "LocationPoint",
    "Orientation",
    "SystemConfig",
    "validate_location",
    "validate_system_config",
    # report
    "build_report",
    "estimate_solar",
]
