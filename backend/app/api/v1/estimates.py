"""Solar estimate endpoints."""
from fastapi import APIRouter, HTTPException, Request, status

from app.core.rate_limit import estimate_limiter
from app.schemas.estimate import (
    AddressEstimateRequest,
    EstimateResponse,
    LocationEstimateRequest,
)
from app.services.estimate_service import estimate_for_address, estimate_for_location
from engine.solar.models import InvalidLocation, InvalidSystemConfig, LocationPoint

router = APIRouter()


@router.post(
    "",
    response_model=EstimateResponse,
    summary="Estimate solar production for an address",
    description=(
        "Geocode the address, fetch monthly irradiance from NREL, and estimate "
        "monthly generation, annual savings, and CO2 offset. Falls back to "
        "built-in estimates when either external source is unavailable."
    ),
)
async def estimate_address(body: AddressEstimateRequest, request: Request):
    estimate_limiter.check(request)
    try:
        return await estimate_for_address(body.address, body.to_system_config())
    except (InvalidLocation, InvalidSystemConfig) as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc


@router.post(
    "/location",
    response_model=EstimateResponse,
    summary="Estimate solar production for coordinates",
    description=(
        "Run the estimator for known coordinates. Supply monthly_radiation to use "
        "measured irradiance; omit it to use the latitude/season estimate."
    ),
)
async def estimate_location(body: LocationEstimateRequest):
    location = LocationPoint(body.latitude, body.longitude, body.formatted_address)
    try:
        return estimate_for_location(location, body.to_system_config(), body.monthly_radiation)
    except (InvalidLocation, InvalidSystemConfig) as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc
