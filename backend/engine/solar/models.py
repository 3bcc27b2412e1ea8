"""Value types and boundary validation for the solar estimator.

Everything here is immutable. A calculation builds these values, returns
them and keeps nothing. Validation lives in explicit ``validate_*``
functions so that callers decide where the boundary is; the calculators
themselves assume clean inputs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from .constants import MAX_ROOF_ANGLE_DEG, MIN_ROOF_ANGLE_DEG


# ======================================================================
# Errors
# ======================================================================

class InvalidLocation(ValueError):
    """Latitude or longitude outside physical bounds."""


class InvalidSystemConfig(ValueError):
    """System parameters the estimator cannot represent."""


class IrradianceSourceUnavailable(RuntimeError):
    """The measured irradiance lookup failed; use the internal estimate."""


# ======================================================================
# Inputs
# ======================================================================

class Orientation(str, Enum):
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"


@dataclass(frozen=True)
class LocationPoint:
    """A geocoded site."""

    latitude: float
    longitude: float
    formatted_address: str = ""


@dataclass(frozen=True)
class SystemConfig:
    """Rooftop system parameters supplied by the user.

    ``orientation`` is kept as a plain string: the generation model maps
    unknown values to a neutral factor instead of failing.
    """

    system_size_kw: float
    electricity_price_per_kwh: float
    roof_angle_deg: int = 30
    orientation: str = Orientation.SOUTH.value


# ======================================================================
# Validation
# ======================================================================

def validate_location(latitude: float, longitude: float) -> None:
    """Raise :class:`InvalidLocation` unless the coordinates are on Earth."""
    for name, value, limit in (("latitude", latitude, 90.0), ("longitude", longitude, 180.0)):
        if not isinstance(value, (int, float)) or not math.isfinite(value):
            raise InvalidLocation(f"{name} must be a finite number, got {value!r}")
        if not -limit <= value <= limit:
            raise InvalidLocation(f"{name} {value} outside [-{limit:g}, {limit:g}]")


def validate_system_config(config: SystemConfig) -> None:
    """Raise :class:`InvalidSystemConfig` for values outside the model's range."""
    if not config.system_size_kw > 0:
        raise InvalidSystemConfig(
            f"system_size_kw must be positive, got {config.system_size_kw}"
        )
    if not config.electricity_price_per_kwh > 0:
        raise InvalidSystemConfig(
            f"electricity_price_per_kwh must be positive, got {config.electricity_price_per_kwh}"
        )
    if not MIN_ROOF_ANGLE_DEG <= config.roof_angle_deg <= MAX_ROOF_ANGLE_DEG:
        raise InvalidSystemConfig(
            f"roof_angle_deg {config.roof_angle_deg} outside "
            f"[{MIN_ROOF_ANGLE_DEG}, {MAX_ROOF_ANGLE_DEG}]"
        )
    valid = {o.value for o in Orientation}
    if config.orientation not in valid:
        raise InvalidSystemConfig(
            f"Unknown orientation '{config.orientation}'. Valid: {sorted(valid)}"
        )
