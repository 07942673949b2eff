"""
Services package initialization.
"""

from forecast_chart.services.chart_renderer import (
    ChartHandle,
    ChartInstance,
    ChartRenderer,
    segment_tone,
)
from forecast_chart.services.labels import build_labels, format_label
from forecast_chart.services.open_meteo import OpenMeteoClient
from forecast_chart.services.status_service import ChartState, StatusService
from forecast_chart.services.forecast_pipeline import ForecastPipeline, ForecastResult, SearchOutcome

__all__ = [
    "ChartHandle",
    "ChartInstance",
    "ChartRenderer",
    "segment_tone",
    "build_labels",
    "format_label",
    "OpenMeteoClient",
    "ChartState",
    "StatusService",
    "ForecastPipeline",
    "ForecastResult",
    "SearchOutcome",
]
