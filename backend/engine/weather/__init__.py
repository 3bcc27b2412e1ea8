"""Weather data module (NREL Solar Resource monthly irradiance)."""

from .nrel_solar_resource import fetch_monthly_ghi, parse_solar_resource

__all__ = [
    "fetch_monthly_ghi",
    "parse_solar_resource",
]
