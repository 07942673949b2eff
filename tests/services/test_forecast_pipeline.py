"""
Tests for the search-to-render forecast pipeline.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from forecast_chart.config import get_settings
from forecast_chart.definitions.chart import ChartStatus
from forecast_chart.exceptions import NotFoundError
from forecast_chart.models.weather import ForecastSeries, GeoResult
from forecast_chart.services.chart_renderer import ChartRenderer
from forecast_chart.services.forecast_pipeline import ForecastPipeline
from forecast_chart.services.status_service import StatusService

settings = get_settings()


class TestForecastPipeline:
    """End-to-end behaviour of ForecastPipeline.search against mocked Open-Meteo."""

    @pytest.mark.asyncio
    async def test_madrid_end_to_end(self, make_pipeline, renderer, status, calls):
        pipeline = make_pipeline()

        outcome = await pipeline.search("Madrid")

        assert outcome.status == ChartStatus.SUCCESS
        assert outcome.superseded is False
        assert outcome.result.location == "Madrid, Spain"
        assert status.status == ChartStatus.SUCCESS
        assert pipeline.last_result.labels == ["1/1 0:00"]
        assert pipeline.last_result.values == [5]
        assert pipeline.last_result.location == "Madrid, Spain"

        instance = renderer.current
        assert instance.config.labels == ["1/1 0:00"]
        assert instance.config.values == [5]
        assert instance.config.location_label == "Madrid, Spain"

    @pytest.mark.asyncio
    async def test_requests_are_sequential(self, make_pipeline, calls):
        """The forecast request uses the coordinates of the geocoding answer."""
        pipeline = make_pipeline()

        await pipeline.search("  Madrid  ")

        assert len(calls) == 2
        assert calls[0].url.host == "geocoding-api.open-meteo.com"
        assert calls[0].url.params["name"] == "Madrid"
        assert calls[1].url.host == "api.open-meteo.com"
        assert calls[1].url.params["latitude"] == "40.4"
        assert calls[1].url.params["longitude"] == "-3.7"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("city", ["", "   ", "\t\n", None])
    async def test_blank_input_is_ignored(self, make_pipeline, status, calls, city):
        pipeline = make_pipeline()

        outcome = await pipeline.search(city)

        assert outcome is None
        assert calls == []
        assert status.status == ChartStatus.IDLE
        assert pipeline.latest_token == 0

    @pytest.mark.asyncio
    async def test_city_not_found(self, make_pipeline, renderer, status):
        pipeline = make_pipeline(geocoding={"results": []})

        outcome = await pipeline.search("Atlantis")

        assert outcome.status == ChartStatus.ERROR
        assert outcome.message == settings.not_found_message
        assert outcome.result is None
        assert status.status == ChartStatus.ERROR
        assert status.state.message == settings.not_found_message
        assert renderer.current is None

    @pytest.mark.asyncio
    async def test_missing_hourly_data(self, make_pipeline, status):
        pipeline = make_pipeline(forecast={"latitude": 40.4})

        await pipeline.search("Madrid")

        assert status.status == ChartStatus.ERROR
        assert "hourly temperature data" in status.state.message

    @pytest.mark.asyncio
    async def test_network_failure(self, make_client, renderer, status):
        def handler(request):
            raise httpx.ConnectError("Network is unreachable", request=request)

        pipeline = ForecastPipeline(make_client(handler=handler), renderer, status)

        await pipeline.search("Madrid")

        assert status.status == ChartStatus.ERROR
        assert status.state.message == "Network is unreachable"

    @pytest.mark.asyncio
    async def test_error_without_message_uses_fallback(self, renderer, status):
        api_client = MagicMock()
        api_client.geocode = AsyncMock(side_effect=RuntimeError())

        pipeline = ForecastPipeline(api_client, renderer, status)
        outcome = await pipeline.search("Madrid")

        assert outcome.message == settings.default_error_message
        assert status.status == ChartStatus.ERROR
        assert status.state.message == settings.default_error_message

    @pytest.mark.asyncio
    async def test_render_failure_ends_in_error(self, make_client, status):
        renderer = MagicMock(spec=ChartRenderer)
        renderer.render.side_effect = ValueError("canvas unavailable")

        pipeline = ForecastPipeline(make_client(), renderer, status)
        await pipeline.search("Madrid")

        assert status.status == ChartStatus.ERROR
        assert status.state.message == "canvas unavailable"

    @pytest.mark.asyncio
    async def test_loading_shown_before_lookup(self, renderer):
        status = MagicMock(spec=StatusService)
        api_client = MagicMock()

        async def geocode(city):
            status.show_loading.assert_called_once()
            raise NotFoundError(settings.not_found_message)

        api_client.geocode = geocode

        pipeline = ForecastPipeline(api_client, renderer, status)
        await pipeline.search("Atlantis")

        status.show_error.assert_called_once_with(settings.not_found_message)
        status.show_success.assert_not_called()

    @pytest.mark.asyncio
    async def test_error_leaves_pipeline_ready(self, make_client, renderer, status, calls):
        """A failed search does not block the next one."""
        responses = iter([{"results": []}, {"results": [{"latitude": 48.85, "longitude": 2.35, "name": "Paris", "country": "France"}]}])

        def handler(request):
            calls.append(request)
            if request.url.host == "geocoding-api.open-meteo.com":
                return httpx.Response(200, json=next(responses))
            return httpx.Response(200, json={"hourly": {"time": ["2024-07-01T15:00"], "temperature_2m": [31.5]}})

        pipeline = ForecastPipeline(make_client(handler=handler), renderer, status)

        await pipeline.search("Pariss")
        assert status.status == ChartStatus.ERROR

        await pipeline.search("Paris")
        assert status.status == ChartStatus.SUCCESS
        assert pipeline.last_result.location == "Paris, France"
        assert pipeline.last_result.labels == ["1/7 15:00"]

    @pytest.mark.asyncio
    async def test_missing_hours_are_kept_as_gaps(self, make_pipeline, renderer, status):
        forecast = {
            "hourly": {
                "time": ["2024-01-01T00:00", "2024-01-01T01:00", "2024-01-01T02:00"],
                "temperature_2m": [5.0, None, 7.0],
            }
        }
        pipeline = make_pipeline(forecast=forecast)

        outcome = await pipeline.search("Madrid")

        assert outcome.status == ChartStatus.SUCCESS
        assert outcome.result.values == [5.0, None, 7.0]
        assert len(outcome.result.labels) == 3
        assert renderer.current.config.values == [5.0, None, 7.0]


class TestOverlappingSearches:
    """A search overtaken by a newer one must not overwrite its result."""

    @staticmethod
    def gated_client(gates):
        """
        API client whose geocode call for each city waits on its own event.
        """
        api_client = MagicMock()

        async def geocode(city):
            await gates[city].wait()
            return GeoResult(latitude=1.0, longitude=2.0, name=city, country="Testland")

        async def fetch_forecast(latitude, longitude):
            return ForecastSeries(timestamps=["2024-01-01T00:00"], temperatures=[12.0])

        api_client.geocode = geocode
        api_client.fetch_forecast = fetch_forecast
        return api_client

    @pytest.mark.asyncio
    async def test_stale_search_is_discarded(self, renderer, status):
        gates = {"Slow": asyncio.Event(), "Fast": asyncio.Event()}
        pipeline = ForecastPipeline(self.gated_client(gates), renderer, status, discard_stale_searches=True)

        slow = asyncio.create_task(pipeline.search("Slow"))
        await asyncio.sleep(0)
        fast = asyncio.create_task(pipeline.search("Fast"))
        await asyncio.sleep(0)

        gates["Fast"].set()
        fast_outcome = await fast
        gates["Slow"].set()
        slow_outcome = await slow

        assert fast_outcome.superseded is False
        assert slow_outcome.superseded is True
        assert slow_outcome.status == ChartStatus.SUCCESS
        assert slow_outcome.result.location == "Slow, Testland"
        assert status.status == ChartStatus.SUCCESS
        assert pipeline.last_result.location == "Fast, Testland"
        assert renderer.current.config.location_label == "Fast, Testland"

    @pytest.mark.asyncio
    async def test_last_writer_wins_when_not_discarding(self, renderer, status):
        gates = {"Slow": asyncio.Event(), "Fast": asyncio.Event()}
        pipeline = ForecastPipeline(self.gated_client(gates), renderer, status, discard_stale_searches=False)

        slow = asyncio.create_task(pipeline.search("Slow"))
        await asyncio.sleep(0)
        fast = asyncio.create_task(pipeline.search("Fast"))
        await asyncio.sleep(0)

        gates["Fast"].set()
        await fast
        gates["Slow"].set()
        await slow

        assert pipeline.last_result.location == "Slow, Testland"
        assert renderer.current.config.location_label == "Slow, Testland"

    @pytest.mark.asyncio
    async def test_stale_failure_does_not_show_error(self, renderer, status):
        api_client = MagicMock()
        gate = asyncio.Event()

        async def geocode(city):
            if city == "Broken":
                await gate.wait()
                raise NotFoundError(settings.not_found_message)
            return GeoResult(latitude=1.0, longitude=2.0, name=city, country="Testland")

        async def fetch_forecast(latitude, longitude):
            return ForecastSeries(timestamps=["2024-01-01T00:00"], temperatures=[12.0])

        api_client.geocode = geocode
        api_client.fetch_forecast = fetch_forecast
        pipeline = ForecastPipeline(api_client, renderer, status, discard_stale_searches=True)

        broken = asyncio.create_task(pipeline.search("Broken"))
        await asyncio.sleep(0)
        await pipeline.search("Lisbon")
        gate.set()
        broken_outcome = await broken

        assert broken_outcome.status == ChartStatus.ERROR
        assert broken_outcome.superseded is True
        assert broken_outcome.message == settings.not_found_message

        assert status.status == ChartStatus.SUCCESS
        assert status.state.message is None
