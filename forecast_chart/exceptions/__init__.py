"""Forecast chart exceptions."""

from .common import (
    ForecastChartException,
    NotFoundError,
    TransportOrParseError,
)

__all__ = [
    "ForecastChartException",
    "NotFoundError",
    "TransportOrParseError",
]
