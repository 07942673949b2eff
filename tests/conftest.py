"""
Common test fixtures and configuration.
"""

from typing import Callable, Dict, List

import httpx
import pytest

from forecast_chart.config import get_settings
from forecast_chart.services.chart_renderer import ChartRenderer
from forecast_chart.services.forecast_pipeline import ForecastPipeline
from forecast_chart.services.open_meteo import OpenMeteoClient
from forecast_chart.services.status_service import StatusService

settings = get_settings()

MADRID_RESULT = {
    "id": 3117735,
    "name": "Madrid",
    "latitude": 40.4,
    "longitude": -3.7,
    "country": "Spain",
    "country_code": "ES",
    "timezone": "Europe/Madrid",
}

MADRID_FORECAST = {
    "latitude": 40.4,
    "longitude": -3.7,
    "timezone": "Europe/Madrid",
    "hourly_units": {"time": "iso8601", "temperature_2m": "°C"},
    "hourly": {"time": ["2024-01-01T00:00"], "temperature_2m": [5]},
}


def open_meteo_handler(
    geocoding: Dict, forecast: Dict, calls: List[httpx.Request]
) -> Callable[[httpx.Request], httpx.Response]:
    """
    Build a MockTransport handler answering both Open-Meteo endpoints.

    Every request is appended to ``calls`` so tests can assert on order
    and query parameters.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if request.url.host == httpx.URL(settings.geocoding_api_url).host:
            return httpx.Response(200, json=geocoding)
        return httpx.Response(200, json=forecast)

    return handler


@pytest.fixture
def calls() -> List[httpx.Request]:
    return []


@pytest.fixture
def make_client(calls):
    """
    Factory for an OpenMeteoClient backed by an in-memory transport.
    """

    def factory(geocoding=None, forecast=None, handler=None) -> OpenMeteoClient:
        if handler is None:
            handler = open_meteo_handler(
                {"results": [MADRID_RESULT]} if geocoding is None else geocoding,
                MADRID_FORECAST if forecast is None else forecast,
                calls,
            )
        return OpenMeteoClient(httpx.AsyncClient(transport=httpx.MockTransport(handler)))

    return factory


@pytest.fixture
def renderer() -> ChartRenderer:
    return ChartRenderer()


@pytest.fixture
def status() -> StatusService:
    return StatusService()


@pytest.fixture
def make_pipeline(make_client, renderer, status):
    def factory(discard_stale_searches=True, **client_kwargs) -> ForecastPipeline:
        return ForecastPipeline(
            api_client=make_client(**client_kwargs),
            renderer=renderer,
            status=status,
            discard_stale_searches=discard_stale_searches,
        )

    return factory


@pytest.fixture
def madrid() -> Dict:
    return dict(MADRID_RESULT)


@pytest.fixture
def madrid_forecast() -> Dict:
    return {"hourly": dict(MADRID_FORECAST["hourly"])}
