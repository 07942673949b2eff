"""
Timestamp to chart label conversion.
"""

from datetime import datetime
from typing import List, Sequence

from forecast_chart.exceptions import TransportOrParseError


def format_label(timestamp: str) -> str:
    """
    Format an ISO-8601 timestamp as a compact ``D/M H:00`` label.

    The forecast API already returns local wall-clock times (``timezone=auto``),
    so the calendar fields are read as-is with no conversion.
    """
    try:
        moment = datetime.fromisoformat(timestamp)
    except (TypeError, ValueError) as e:
        raise TransportOrParseError(
            f"Invalid forecast timestamp: {timestamp!r}", source="forecast"
        ) from e
    return f"{moment.day}/{moment.month} {moment.hour}:00"


def build_labels(timestamps: Sequence[str]) -> List[str]:
    return [format_label(timestamp) for timestamp in timestamps]
