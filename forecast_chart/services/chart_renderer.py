"""
This module builds the temperature line chart and owns the live chart instance.
"""

import json
import math
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import plotly.graph_objects as go
import plotly.io as pio
from pydantic import BaseModel, Field, model_validator

from forecast_chart.config import get_settings
from forecast_chart.definitions.chart import SegmentTone
from forecast_chart.utils.logger import setup_logger

logger = setup_logger(__name__)
settings = get_settings()

LINE_WIDTH = 2
LINE_SMOOTHING = 0.4
POINT_SIZE = 6
LEGEND_GROUP = "temperature"
Y_AXIS_TITLE = "Temperature (°C)"
X_AXIS_TITLE = "Timeline (Days / Hours)"


class ChartConfig(BaseModel):
    labels: List[str] = Field(..., description="X-axis labels, one per point")
    values: List[Optional[float]] = Field(..., description="Temperatures in °C, one per point, None for gaps")
    location_label: str = Field(..., description="Location shown in the legend")

    @model_validator(mode="after")
    def check_alignment(self) -> "ChartConfig":
        if len(self.labels) != len(self.values):
            raise ValueError(
                f"Chart needs one label per value, got {len(self.labels)} labels "
                f"for {len(self.values)} values"
            )
        return self

    @property
    def dataset_label(self) -> str:
        return f"Temperature in {self.location_label} (°C)"


def segment_tone(
    start: float,
    end: float,
    hot_threshold: Optional[float] = None,
    cold_threshold: Optional[float] = None,
) -> SegmentTone:
    """
    Classify the line segment between two adjacent points.

    The hot check runs first, so a segment touching both extremes is hot.
    Both thresholds are exclusive.
    """
    hot = settings.hot_threshold if hot_threshold is None else hot_threshold
    cold = settings.cold_threshold if cold_threshold is None else cold_threshold

    if start > hot or end > hot:
        return SegmentTone.HOT
    if start < cold or end < cold:
        return SegmentTone.COLD
    return SegmentTone.NEUTRAL


def segment_tones(values: Sequence[Optional[float]]) -> List[Optional[SegmentTone]]:
    """Tone of every segment; segments touching a missing value are gaps (None)."""
    return [
        None if start is None or end is None else segment_tone(start, end)
        for start, end in zip(values, values[1:])
    ]


def tone_runs(values: Sequence[Optional[float]]) -> List[Tuple[SegmentTone, int, int]]:
    """
    Group consecutive segments of the same tone.

    Returns ``(tone, first_point, last_point)`` tuples with inclusive point
    indices; adjacent runs share their boundary point. Gaps end a run and
    are not part of any.
    """
    runs: List[Tuple[SegmentTone, int, int]] = []
    previous = None
    for index, tone in enumerate(segment_tones(values)):
        if tone is None:
            previous = None
            continue
        if runs and previous == tone:
            runs[-1] = (tone, runs[-1][1], index + 1)
        else:
            runs.append((tone, index, index + 1))
        previous = tone
    return runs


def tick_positions(count: int, max_ticks: Optional[int] = None) -> List[int]:
    limit = max_ticks or settings.max_x_ticks
    if count <= limit:
        return list(range(count))
    step = math.ceil(count / limit)
    return list(range(0, count, step))


def tone_colors() -> Dict[SegmentTone, str]:
    return {
        SegmentTone.HOT: settings.hot_color,
        SegmentTone.COLD: settings.cold_color,
        SegmentTone.NEUTRAL: settings.neutral_color,
    }


def build_figure(config: ChartConfig) -> go.Figure:
    """
    Build the Plotly line chart for a forecast.

    The line is split into one smoothed trace per run of equally colored
    segments; a separate marker trace carries the points, the legend entry
    and the tooltips.
    """
    x_values = list(range(len(config.values)))
    colors = tone_colors()

    fig = go.Figure()
    for tone, first, last in tone_runs(config.values):
        fig.add_trace(go.Scatter(
            x=x_values[first:last + 1],
            y=config.values[first:last + 1],
            mode="lines",
            fill="none",
            line=dict(color=colors[tone], width=LINE_WIDTH, shape="spline", smoothing=LINE_SMOOTHING),
            legendgroup=LEGEND_GROUP,
            showlegend=False,
            hoverinfo="skip",
        ))

    fig.add_trace(go.Scatter(
        x=x_values,
        y=config.values,
        mode="markers",
        name=config.dataset_label,
        legendgroup=LEGEND_GROUP,
        marker=dict(size=POINT_SIZE, color=settings.neutral_color),
        customdata=config.labels,
        hovertemplate="<b>%{customdata}</b><br>%{y:.1f} °C<extra></extra>",
    ))

    ticks = tick_positions(len(x_values))
    fig.update_layout(
        autosize=True,
        showlegend=True,
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="left", x=0),
        hovermode="x",
        margin=dict(l=50, r=30, t=60, b=50),
        xaxis=dict(
            title=dict(text=X_AXIS_TITLE),
            tickmode="array",
            tickvals=ticks,
            ticktext=[config.labels[i] for i in ticks],
        ),
        yaxis=dict(title=dict(text=Y_AXIS_TITLE), rangemode="normal"),
    )
    return fig


class ChartInstance:
    """A constructed chart bound to the page canvas."""

    def __init__(self, canvas_id: str, config: ChartConfig, figure: go.Figure):
        self.canvas_id = canvas_id
        self.config = config
        self.figure = figure
        self.released = False

    def release(self):
        self.released = True
        self.figure = None

    def to_json(self) -> Optional[dict]:
        if self.released:
            return None
        return json.loads(pio.to_json(self.figure))


class ChartHandle:
    """
    Owner of at most one live chart instance.

    ``replace`` releases the current instance before constructing the next
    one, so two instances are never alive at the same time.
    """

    def __init__(
        self,
        build: Callable[[ChartConfig], go.Figure] = build_figure,
        canvas_id: Optional[str] = None,
    ):
        self.build = build
        self.canvas_id = canvas_id or settings.canvas_id
        self.current: Optional[ChartInstance] = None

    def replace(self, config: ChartConfig) -> ChartInstance:
        self.release()
        self.current = ChartInstance(self.canvas_id, config, self.build(config))
        return self.current

    def release(self):
        if self.current is not None:
            self.current.release()
            logger.debug(
                "Released chart instance",
                extra={"event": "chart_released", "canvas_id": self.canvas_id},
            )
            self.current = None


class ChartRenderer:
    def __init__(self, handle: Optional[ChartHandle] = None):
        self.handle = handle or ChartHandle()

    def render(
        self, labels: Sequence[str], values: Sequence[Optional[float]], location_label: str
    ) -> ChartInstance:
        config = ChartConfig(
            labels=list(labels), values=list(values), location_label=location_label
        )
        instance = self.handle.replace(config)
        logger.info(
            "Rendered forecast chart",
            extra={
                "event": "chart_rendered",
                "location": location_label,
                "points": len(config.values),
            },
        )
        return instance

    @property
    def current(self) -> Optional[ChartInstance]:
        return self.handle.current
