"""
This module tracks the visual state of the chart page.
"""

from typing import Dict, Optional

from pydantic import BaseModel

from forecast_chart.config import get_settings
from forecast_chart.definitions.chart import ChartStatus
from forecast_chart.utils.logger import setup_logger

logger = setup_logger(__name__)
settings = get_settings()

# Which containers are shown in each state.
VISIBILITY: Dict[ChartStatus, Dict[str, bool]] = {
    ChartStatus.IDLE: {"loading": False, "chart": False, "error": False},
    ChartStatus.LOADING: {"loading": True, "chart": False, "error": False},
    ChartStatus.SUCCESS: {"loading": False, "chart": True, "error": False},
    ChartStatus.ERROR: {"loading": False, "chart": False, "error": True},
}


class ChartState(BaseModel):
    status: ChartStatus = ChartStatus.IDLE
    message: Optional[str] = None


class StatusService:
    """
    Owner of the page status.

    Only the forecast pipeline moves it between states; ``IDLE`` is the
    initial state and is never re-entered.
    """

    def __init__(self):
        self.state = ChartState()

    @property
    def status(self) -> ChartStatus:
        return self.state.status

    @property
    def visibility(self) -> Dict[str, bool]:
        return dict(VISIBILITY[self.state.status])

    def show_loading(self):
        self._set(ChartState(status=ChartStatus.LOADING))

    def show_success(self):
        self._set(ChartState(status=ChartStatus.SUCCESS))

    def show_error(self, message: Optional[str] = None):
        self._set(
            ChartState(
                status=ChartStatus.ERROR,
                message=message or settings.default_error_message,
            )
        )

    def _set(self, state: ChartState):
        logger.debug(
            "Chart status changed",
            extra={
                "event": "status_changed",
                "from": self.state.status.value,
                "to": state.status.value,
            },
        )
        self.state = state
