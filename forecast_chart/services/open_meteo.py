import httpx
from typing import Optional, Dict, Any
from pydantic import ValidationError

from forecast_chart.config import get_settings
from forecast_chart.exceptions import NotFoundError, TransportOrParseError
from forecast_chart.models.weather import (
    ForecastResponse,
    ForecastSeries,
    GeocodingResponse,
    GeoResult,
)
from forecast_chart.utils.logger import setup_logger

logger = setup_logger(__name__)
settings = get_settings()


class OpenMeteoClient:
    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self.client = client or httpx.AsyncClient(timeout=settings.api_timeout)

    async def close(self):
        await self.client.aclose()

    async def geocode(self, city: str) -> GeoResult:
        data = await self._get_json(
            settings.geocoding_api_url,
            params={
                "name": city,
                "count": settings.geocoding_result_count,
                "language": settings.geocoding_language,
                "format": "json",
            },
            source="geocoding",
        )

        try:
            response = GeocodingResponse.model_validate(data)
        except ValidationError as e:
            raise TransportOrParseError(
                f"Malformed geocoding response: {e.error_count()} validation error(s)",
                source="geocoding",
            ) from e

        if not response.results:
            logger.info("City not found", extra={"event": "geocode_not_found", "city": city})
            raise NotFoundError(settings.not_found_message)

        try:
            return GeoResult.model_validate(response.results[0])
        except ValidationError as e:
            raise TransportOrParseError(
                f"Malformed geocoding result for {city}", source="geocoding"
            ) from e

    async def fetch_forecast(self, latitude: float, longitude: float) -> ForecastSeries:
        data = await self._get_json(
            settings.forecast_api_url,
            params={
                "latitude": latitude,
                "longitude": longitude,
                "hourly": settings.hourly_variable,
                "timezone": settings.forecast_timezone,
            },
            source="forecast",
        )

        try:
            return ForecastSeries.from_response(ForecastResponse.model_validate(data))
        except ValidationError as e:
            raise TransportOrParseError(
                "Forecast response is missing or has misaligned hourly temperature data",
                source="forecast",
            ) from e

    async def _get_json(self, url: str, params: Dict[str, Any], source: str) -> Any:
        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            reason = self._error_reason(e.response)
            logger.warning(
                "Open-Meteo returned an error status",
                extra={
                    "event": "api_status_error",
                    "source": source,
                    "status_code": e.response.status_code,
                    "reason": reason,
                },
            )
            raise TransportOrParseError(
                reason or f"{source} request failed with HTTP {e.response.status_code}",
                source=source,
            ) from e
        except httpx.HTTPError as e:
            logger.error(
                "Open-Meteo request failed",
                extra={
                    "event": "api_transport_error",
                    "source": source,
                    "error": str(e),
                    "error_type": type(e).__name__,
                },
            )
            raise TransportOrParseError(str(e), source=source) from e
        except ValueError as e:
            logger.error(
                "Open-Meteo returned a non-JSON body",
                extra={"event": "api_parse_error", "source": source, "error": str(e)},
            )
            raise TransportOrParseError(
                f"{source} response is not valid JSON", source=source
            ) from e

    @staticmethod
    def _error_reason(response: httpx.Response) -> Optional[str]:
        """Open-Meteo reports failures as {"error": true, "reason": "..."}."""
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            return body.get("reason")
        return None
