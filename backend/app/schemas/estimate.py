"""Pydantic schemas for solar estimates."""
from typing import Annotated

from pydantic import BaseModel, Field, field_validator

from engine.solar.models import Orientation, SystemConfig


class SystemParams(BaseModel):
    system_size_kw: float = Field(default=5.0, gt=0, le=1000, description="DC system size in kW")
    electricity_price_per_kwh: float = Field(default=0.15, gt=0, le=10, description="Grid electricity price per kWh")
    roof_angle_deg: int = Field(default=30, ge=0, le=60, description="Roof tilt in degrees (0 = flat)")
    orientation: Orientation = Field(default=Orientation.SOUTH, description="Direction the roof faces")

    def to_system_config(self) -> SystemConfig:
        return SystemConfig(
            system_size_kw=self.system_size_kw,
            electricity_price_per_kwh=self.electricity_price_per_kwh,
            roof_angle_deg=self.roof_angle_deg,
            orientation=self.orientation.value,
        )


class AddressEstimateRequest(SystemParams):
    address: str = Field(min_length=1, max_length=500, description="Street address or city")

    @field_validator("address")
    @classmethod
    def address_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("address must not be blank")
        return v


# kWh/m²/day; infinities and NaN are rejected along with non-positive values
RadiationValue = Annotated[float, Field(gt=0, allow_inf_nan=False)]


class LocationEstimateRequest(SystemParams):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    formatted_address: str = Field(default="", max_length=500)
    monthly_radiation: list[RadiationValue] | None = Field(
        default=None,
        min_length=12,
        max_length=12,
        description="Measured monthly GHI in kWh/m²/day, January first. Omit to use the estimate.",
    )


class LocationOut(BaseModel):
    latitude: float
    longitude: float
    formatted_address: str


class SystemOut(BaseModel):
    system_size_kw: float
    electricity_price_per_kwh: float
    roof_angle_deg: int
    orientation: str
    orientation_factor: float
    angle_factor: float
    effective_system_size_kw: float


class MonthlyEstimate(BaseModel):
    month: str
    radiation: float
    daily_generation_kwh: float
    monthly_generation_kwh: float


class EstimateResponse(BaseModel):
    location: LocationOut
    system: SystemOut
    monthly: list[MonthlyEstimate]
    annual_total_kwh: float
    co2_offset_kg: float
    annual_savings: float
    average_radiation: float
    data_source: str
    used_measured_data: bool
    geocoding_source: str | None = None
