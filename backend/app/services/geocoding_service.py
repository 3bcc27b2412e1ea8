import logging
from dataclasses import dataclass

import httpx

from app.config import settings
from engine.solar.models import LocationPoint, validate_location

logger = logging.getLogger(__name__)

# Offline lookup used when the geocoder is unconfigured or fails.
# Matched as a case-insensitive substring of the address.
CITY_COORDINATES: dict[str, tuple[float, float]] = {
    "new york": (40.7128, -74.0060),
    "los angeles": (34.0522, -118.2437),
    "chicago": (41.8781, -87.6298),
    "houston": (29.7604, -95.3698),
    "phoenix": (33.4484, -112.0740),
    "philadelphia": (39.9526, -75.1652),
    "san antonio": (29.4241, -98.4936),
    "san diego": (32.7157, -117.1611),
    "dallas": (32.7767, -96.7970),
    "san francisco": (37.7749, -122.4194),
    "seattle": (47.6062, -122.3321),
    "denver": (39.7392, -104.9903),
    "boston": (42.3601, -71.0589),
    "atlanta": (33.7490, -84.3880),
    "miami": (25.7617, -80.1918),
}

SOURCE_OPENCAGE = "opencage"
SOURCE_CITY_TABLE = "city_table"
SOURCE_DEFAULT = "default"


@dataclass(frozen=True)
class GeocodeResult:
    location: LocationPoint
    source: str


def fallback_geocode(address: str) -> GeocodeResult:
    """Resolve *address* offline: known city first, then the configured default point."""
    lowered = address.lower()
    for city, (lat, lng) in CITY_COORDINATES.items():
        if city in lowered:
            return GeocodeResult(LocationPoint(lat, lng, address), SOURCE_CITY_TABLE)

    return GeocodeResult(
        LocationPoint(settings.fallback_latitude, settings.fallback_longitude, address),
        SOURCE_DEFAULT,
    )


async def fetch_opencage(
    address: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> LocationPoint | None:
    """Query OpenCage for *address*. Returns None when nothing matched."""
    params = {
        "q": address,
        "key": settings.opencage_api_key,
        "limit": 1,
        "no_annotations": 1,
    }

    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds, transport=transport) as client:
        response = await client.get(f"{settings.opencage_base_url}/json", params=params)
        response.raise_for_status()

    results = response.json().get("results") or []
    if not results:
        return None

    first = results[0]
    geometry = first["geometry"]
    lat, lng = float(geometry["lat"]), float(geometry["lng"])
    validate_location(lat, lng)
    return LocationPoint(lat, lng, first.get("formatted") or address)


async def geocode_address(
    address: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> GeocodeResult:
    """Geocode an address, degrading to :func:`fallback_geocode` on any failure."""
    if not settings.geocoding_enabled:
        return fallback_geocode(address)

    try:
        location = await fetch_opencage(address, transport=transport)
    except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as exc:
        # out-of-range coordinates raise InvalidLocation (a ValueError)
        logger.warning("Geocoding failed for %r, using fallback: %s", address, exc)
        return fallback_geocode(address)

    if location is None:
        logger.warning("No geocoding results for %r, using fallback", address)
        return fallback_geocode(address)

    return GeocodeResult(location, SOURCE_OPENCAGE)
