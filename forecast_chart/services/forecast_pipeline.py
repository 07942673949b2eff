"""
This module provides the search-to-render forecast pipeline.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from forecast_chart.config import get_settings
from forecast_chart.definitions.chart import ChartStatus
from forecast_chart.services.chart_renderer import ChartRenderer
from forecast_chart.services.labels import build_labels
from forecast_chart.services.open_meteo import OpenMeteoClient
from forecast_chart.services.status_service import StatusService
from forecast_chart.utils.logger import setup_logger

logger = setup_logger(__name__)
settings = get_settings()


class ForecastResult(BaseModel):
    location: str = Field(..., description="Location label, '<name>, <country>'")
    labels: List[str] = Field(..., description="Chart labels in 'D/M H:00' form")
    values: List[Optional[float]] = Field(..., description="Hourly temperatures in °C, None for missing hours")


class SearchOutcome(BaseModel):
    """How one search ended, independent of any later search."""

    token: int = Field(..., description="Sequence number of the search")
    status: ChartStatus = Field(..., description="SUCCESS or ERROR")
    message: Optional[str] = Field(None, description="Error message when status is ERROR")
    result: Optional[ForecastResult] = Field(None, description="Forecast when status is SUCCESS")
    superseded: bool = Field(False, description="A newer search started before this one finished")


class ForecastPipeline:
    """
    Looks up a city, fetches its hourly temperatures and renders the chart.
    """

    def __init__(
        self,
        api_client: OpenMeteoClient,
        renderer: ChartRenderer,
        status: StatusService,
        discard_stale_searches: Optional[bool] = None,
    ):
        """
        Initialize the pipeline with its collaborators.

        When ``discard_stale_searches`` is on, a search that was overtaken by
        a newer one neither renders nor commits its final state; it still
        reports its own outcome, marked as superseded.
        """
        self.api_client = api_client
        self.renderer = renderer
        self.status = status
        self.discard_stale_searches = (
            settings.discard_stale_searches
            if discard_stale_searches is None
            else discard_stale_searches
        )
        self.latest_token = 0
        self.last_result: Optional[ForecastResult] = None

    async def search(self, city_name: str) -> Optional[SearchOutcome]:
        """
        Run one search and return how it ended.

        Blank input returns None without touching the state. Every failure
        after the loading state is shown ends in an ERROR outcome carrying
        the error's message.
        """
        city = (city_name or "").strip()
        if not city:
            logger.debug("Ignoring blank search", extra={"event": "search_blank"})
            return None

        self.latest_token += 1
        token = self.latest_token
        self.status.show_loading()
        logger.info("Search started", extra={"event": "search_started", "city": city, "token": token})

        try:
            geo = await self.api_client.geocode(city)
            series = await self.api_client.fetch_forecast(geo.latitude, geo.longitude)
            result = ForecastResult(
                location=geo.location_label,
                labels=build_labels(series.timestamps),
                values=series.temperatures,
            )

            if self._is_stale(token):
                return SearchOutcome(token=token, status=ChartStatus.SUCCESS, result=result, superseded=True)

            self.renderer.render(result.labels, result.values, result.location)
            self.last_result = result
        except Exception as e:
            message = str(e) or settings.default_error_message
            if self._is_stale(token):
                return SearchOutcome(token=token, status=ChartStatus.ERROR, message=message, superseded=True)
            logger.warning(
                "Search failed",
                extra={
                    "event": "search_failed",
                    "city": city,
                    "token": token,
                    "error": str(e),
                    "error_type": type(e).__name__,
                },
            )
            self.status.show_error(message)
            return SearchOutcome(token=token, status=ChartStatus.ERROR, message=message)

        self.status.show_success()
        logger.info(
            "Search completed",
            extra={"event": "search_completed", "city": city, "token": token, "points": len(result.labels)},
        )
        return SearchOutcome(token=token, status=ChartStatus.SUCCESS, result=result)

    def _is_stale(self, token: int) -> bool:
        if not self.discard_stale_searches or token == self.latest_token:
            return False
        logger.info(
            "Discarding stale search result",
            extra={"event": "search_stale", "token": token, "latest_token": self.latest_token},
        )
        return True
