"""Fixed lookup tables for the monthly solar estimation model.

All tables are indexed by calendar month with January at index 0 and are
stored as tuples (or read-only mappings) so they cannot drift between
call sites.
"""

from __future__ import annotations

from types import MappingProxyType

MONTHS_PER_YEAR: int = 12

MONTH_LABELS: tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Gregorian, non-leap year
DAYS_IN_MONTH: tuple[int, ...] = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# ---------------------------------------------------------------------------
# Irradiance estimate
# ---------------------------------------------------------------------------
BASE_RADIATION: float = 5.0  # kWh/m²/day
LATITUDE_SCALE: float = 2.0

# Relative sunshine per month; the southern table is the northern one
# shifted by six months.
SEASON_ADJUSTMENT_NORTH: tuple[float, ...] = (
    0.7, 0.8, 0.9, 1.0, 1.1, 1.2, 1.2, 1.1, 1.0, 0.9, 0.8, 0.7,
)
SEASON_ADJUSTMENT_SOUTH: tuple[float, ...] = (
    1.2, 1.1, 1.0, 0.9, 0.8, 0.7, 0.7, 0.8, 0.9, 1.0, 1.1, 1.2,
)

# ---------------------------------------------------------------------------
# Generation model
# ---------------------------------------------------------------------------
SYSTEM_EFFICIENCY: float = 0.75  # panel + inverter derate

ORIENTATION_FACTORS = MappingProxyType({
    "south": 1.0,
    "east": 0.85,
    "west": 0.85,
    "north": 0.65,
})
DEFAULT_ORIENTATION_FACTOR: float = 1.0

OPTIMAL_ROOF_ANGLE_DEG: float = 30.0
ANGLE_LOSS_PER_DEGREE: float = 0.01
MIN_ANGLE_FACTOR: float = 0.7
MIN_ROOF_ANGLE_DEG: int = 0
MAX_ROOF_ANGLE_DEG: int = 60

# ---------------------------------------------------------------------------
# Impact model
# ---------------------------------------------------------------------------
GRID_EMISSION_FACTOR_KG_PER_KWH: float = 0.4

# Presentation
DISPLAY_DECIMALS: int = 2
COORDINATE_DECIMALS: int = 4
