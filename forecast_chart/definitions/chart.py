"""
This module defines chart states and segment tones for the application.
"""

from enum import Enum


class ApiVersion(Enum):
    V1 = "v1"


class ChartStatus(str, Enum):
    """Visual states of the chart page."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class SegmentTone(str, Enum):
    """Color classes a line segment can fall into."""

    HOT = "hot"
    COLD = "cold"
    NEUTRAL = "neutral"


CLICK_TRIGGER = "click"
ENTER_KEY = "Enter"
