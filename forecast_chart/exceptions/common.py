class ForecastChartException(Exception):
    """Base exception for the forecast pipeline."""
    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(message)


class NotFoundError(ForecastChartException):
    """Raised when geocoding returns no match for the city name."""


class TransportOrParseError(ForecastChartException):
    """Raised when a request fails or its payload cannot be parsed."""

    def __init__(self, message: str = "", source: str = ""):
        self.source = source
        super().__init__(message)
