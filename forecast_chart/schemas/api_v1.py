from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from forecast_chart.definitions.chart import CLICK_TRIGGER, ChartStatus


class SearchRequest(BaseModel):
    city: str = Field("", max_length=100, description="City name as typed by the user")
    trigger: str = Field(CLICK_TRIGGER, description="'click' or the key pressed in the input")


class ChartStateResponse(BaseModel):
    status: ChartStatus = Field(..., description="Current page state")
    message: Optional[str] = Field(None, description="Error message when status is 'error'")
    visibility: Dict[str, bool] = Field(..., description="Shown containers: loading, chart, error")
    location: Optional[str] = Field(None, description="Location label of the rendered chart")
    labels: List[str] = Field(default_factory=list, description="Chart labels in 'D/M H:00' form")
    values: List[Optional[float]] = Field(default_factory=list, description="Hourly temperatures in °C, null for missing hours")
    chart: Optional[dict] = Field(None, description="Plotly figure JSON of the live chart")
    superseded: bool = Field(False, description="A newer search from the same page started before this one finished")


class HealthResponse(BaseModel):
    status: str = Field(..., description="Service health status")
    version: str = Field(..., description="API version")
    timestamp: str = Field(..., description="Current timestamp")
    active_sessions: int = Field(..., description="Number of open page sessions")
