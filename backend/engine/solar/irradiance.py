"""
Monthly irradiance resolution.

Produces the 12-month global horizontal irradiance series (kWh/m²/day)
that drives the generation model. Two sources exist:

- **Measured**: monthly averages supplied by an external resource
  (e.g. the NREL Solar Resource API), trusted as-is.
- **Estimated**: a latitude/season approximation used whenever measured
  data is absent or its lookup failed.

The source is part of the returned type, so downstream code never has
to thread a separate "used measured data" flag around.

References
----------
- Simplified cosine-of-latitude scaling with a fixed seasonal profile;
  not an astronomical model.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import ClassVar

import numpy as np
from numpy.typing import NDArray

from .constants import (
    BASE_RADIATION,
    LATITUDE_SCALE,
    MONTHS_PER_YEAR,
    SEASON_ADJUSTMENT_NORTH,
    SEASON_ADJUSTMENT_SOUTH,
)

logger = logging.getLogger(__name__)

MEASURED_SOURCE_LABEL = "NREL Solar Resource Data API"
ESTIMATED_SOURCE_LABEL = "Calculated estimates based on location and time of year"


@dataclass(frozen=True)
class MonthlyIrradiance:
    """Twelve monthly GHI values, January first."""

    values: tuple[float, ...]

    is_measured: ClassVar[bool]

    def as_array(self) -> NDArray[np.float64]:
        return np.asarray(self.values, dtype=np.float64)


@dataclass(frozen=True)
class MeasuredIrradiance(MonthlyIrradiance):
    """Monthly irradiance taken from an external data source."""

    source: str = MEASURED_SOURCE_LABEL

    is_measured: ClassVar[bool] = True


@dataclass(frozen=True)
class EstimatedIrradiance(MonthlyIrradiance):
    """Monthly irradiance synthesised from latitude and season."""

    latitude: float
    source: str = ESTIMATED_SOURCE_LABEL

    is_measured: ClassVar[bool] = False


IrradianceSeries = MeasuredIrradiance | EstimatedIrradiance


def season_adjustment(latitude: float) -> tuple[float, ...]:
    """Return the seasonal profile for the hemisphere containing *latitude*."""
    return SEASON_ADJUSTMENT_NORTH if latitude >= 0 else SEASON_ADJUSTMENT_SOUTH


def latitude_adjustment(latitude: float) -> float:
    """``cos(|lat|) * 2``: 2.0 at the equator, 0 at the poles."""
    return math.cos(abs(latitude) * math.pi / 180.0) * LATITUDE_SCALE


def estimate_monthly_radiation(latitude: float) -> NDArray[np.float64]:
    """Approximate monthly average daily irradiance for a latitude.

    Parameters
    ----------
    latitude : float
        Site latitude in degrees (positive north).

    Returns
    -------
    ndarray
        12 values in kWh/m²/day, January first.
    """
    season = np.asarray(season_adjustment(latitude), dtype=np.float64)
    return BASE_RADIATION * latitude_adjustment(latitude) * season


def resolve_irradiance(
    latitude: float,
    measured: Sequence[float] | None = None,
) -> IrradianceSeries:
    """Pick measured irradiance when usable, otherwise estimate it.

    A measured series is used unchanged when it has exactly 12 entries.
    Anything else (``None``, wrong length) falls back to
    :func:`estimate_monthly_radiation`. Never raises.
    """
    if measured is not None:
        if len(measured) == MONTHS_PER_YEAR:
            return MeasuredIrradiance(values=tuple(float(v) for v in measured))
        logger.warning(
            "Ignoring measured irradiance with %d entries (expected %d); using estimate",
            len(measured),
            MONTHS_PER_YEAR,
        )

    radiation = estimate_monthly_radiation(latitude)
    return EstimatedIrradiance(
        values=tuple(float(v) for v in radiation),
        latitude=latitude,
    )
