from pydantic import BaseModel, Field, model_validator
from typing import List, Optional


class GeoResult(BaseModel):
    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")
    name: str = Field(..., description="Resolved place name")
    country: str = Field("", description="Country of the resolved place")

    @property
    def location_label(self) -> str:
        return f"{self.name}, {self.country}"


class GeocodingResponse(BaseModel):
    results: Optional[List[dict]] = Field(None, description="Geocoding matches, best first")


class HourlyTemperatures(BaseModel):
    time: List[str] = Field(..., description="ISO-8601 local timestamps")
    temperature_2m: List[Optional[float]] = Field(..., description="Temperature at 2 meters in °C, null for missing hours")


class ForecastResponse(BaseModel):
    hourly: HourlyTemperatures = Field(..., description="Hourly forecast block")


class ForecastSeries(BaseModel):
    timestamps: List[str] = Field(..., description="Ordered ISO-8601 timestamps")
    temperatures: List[Optional[float]] = Field(..., description="Temperatures aligned with timestamps, None for gaps")

    @model_validator(mode="after")
    def check_alignment(self) -> "ForecastSeries":
        if len(self.timestamps) != len(self.temperatures):
            raise ValueError(
                f"Forecast series is misaligned: {len(self.timestamps)} timestamps "
                f"for {len(self.temperatures)} temperatures"
            )
        return self

    @classmethod
    def from_response(cls, response: ForecastResponse) -> "ForecastSeries":
        return cls(
            timestamps=response.hourly.time,
            temperatures=response.hourly.temperature_2m,
        )

    def __len__(self) -> int:
        return len(self.timestamps)
