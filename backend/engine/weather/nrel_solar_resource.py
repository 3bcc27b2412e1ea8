"""NREL Solar Resource API client.

Fetches long-term monthly average global horizontal irradiance (GHI) for a
site. Values are already in kWh/m²/day, the unit the estimator works in.

Any failure (transport error, HTTP error status, malformed payload) is
reported as :class:`IrradianceSourceUnavailable`; callers are expected to
fall back to the internal estimate rather than surface it.
"""

from __future__ import annotations

import math
from typing import Any

import httpx

from engine.solar.models import IrradianceSourceUnavailable

NREL_SOLAR_BASE_URL = "https://developer.nrel.gov/api/solar"

_MONTH_KEYS = ["jan", "feb", "mar", "apr", "may", "jun",
               "jul", "aug", "sep", "oct", "nov", "dec"]


async def fetch_monthly_ghi(
    lat: float,
    lon: float,
    api_key: str = "DEMO_KEY",
    base_url: str = NREL_SOLAR_BASE_URL,
    timeout: float = 10.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict:
    """Fetch monthly average GHI from the NREL Solar Resource API.

    Returns dict with ``monthly`` (12 floats, January first) and
    ``annual`` (float or None), both in kWh/m²/day.
    """
    params = {
        "api_key": api_key,
        "lat": lat,
        "lon": lon,
    }

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.get(f"{base_url}/solar_resource/v1.json", params=params)
            response.raise_for_status()
            data = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        raise IrradianceSourceUnavailable(f"NREL request failed: {exc}") from exc

    return parse_solar_resource(data)


def parse_solar_resource(data: Any) -> dict:
    """Extract monthly GHI from a Solar Resource API JSON body.

    ``outputs.avg_ghi.monthly`` is normally keyed ``jan``..``dec``; a plain
    12-element list is accepted as well. The API reports locations it has
    no data for with an ``errors`` list or an ``outputs`` value of
    ``"no data"``.
    """
    if not isinstance(data, dict):
        raise IrradianceSourceUnavailable("NREL response is not a JSON object")

    errors = data.get("errors") or []
    if isinstance(errors, str):
        errors = [errors]
    if errors:
        raise IrradianceSourceUnavailable(f"NREL returned errors: {'; '.join(map(str, errors))}")

    outputs = data.get("outputs")
    if not isinstance(outputs, dict):
        raise IrradianceSourceUnavailable("NREL response has no outputs")

    avg_ghi = outputs.get("avg_ghi")
    if not isinstance(avg_ghi, dict):
        raise IrradianceSourceUnavailable("NREL response has no avg_ghi data")

    raw = avg_ghi.get("monthly")
    if isinstance(raw, dict):
        missing = [k for k in _MONTH_KEYS if k not in raw]
        if missing:
            raise IrradianceSourceUnavailable(f"NREL monthly GHI missing months: {missing}")
        raw_values = [raw[k] for k in _MONTH_KEYS]
    elif isinstance(raw, list):
        raw_values = raw
    else:
        raise IrradianceSourceUnavailable("NREL monthly GHI has unexpected format")

    if len(raw_values) != len(_MONTH_KEYS):
        raise IrradianceSourceUnavailable(
            f"Expected 12 monthly GHI values, got {len(raw_values)}"
        )

    try:
        monthly = [float(v) for v in raw_values]
    except (TypeError, ValueError) as exc:
        raise IrradianceSourceUnavailable(f"Non-numeric monthly GHI: {exc}") from exc

    if not all(math.isfinite(v) and v > 0 for v in monthly):
        raise IrradianceSourceUnavailable(f"Monthly GHI must be positive, got {monthly}")

    annual = avg_ghi.get("annual")
    try:
        annual = float(annual) if annual is not None else None
    except (TypeError, ValueError):
        annual = None

    return {"monthly": monthly, "annual": annual}
