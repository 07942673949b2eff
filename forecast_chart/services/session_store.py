"""
Per-page forecast sessions.
"""

from collections import OrderedDict
from typing import Optional

from forecast_chart.config import get_settings
from forecast_chart.services.chart_renderer import ChartRenderer
from forecast_chart.services.forecast_pipeline import ForecastPipeline
from forecast_chart.services.open_meteo import OpenMeteoClient
from forecast_chart.services.status_service import StatusService
from forecast_chart.ui.controls import SearchControls
from forecast_chart.utils.logger import setup_logger

logger = setup_logger(__name__)
settings = get_settings()


class ForecastSession:
    """
    Everything one open page owns: its status, its chart, its pipeline and
    its search controls. Only the Open-Meteo client is shared.
    """

    def __init__(self, session_id: str, api_client: OpenMeteoClient):
        self.session_id = session_id
        self.status = StatusService()
        self.renderer = ChartRenderer()
        self.pipeline = ForecastPipeline(
            api_client=api_client,
            renderer=self.renderer,
            status=self.status,
        )
        self.controls = SearchControls(self.pipeline)

    def close(self):
        self.renderer.handle.release()


class SessionStore:
    """
    In-memory LRU of forecast sessions keyed by page id.

    When the store is full the least recently used session is evicted and
    its chart released.
    """

    def __init__(self, api_client: OpenMeteoClient, max_size: Optional[int] = None):
        self.api_client = api_client
        self.max_size = max_size or settings.max_sessions
        self.sessions: "OrderedDict[str, ForecastSession]" = OrderedDict()

    def get(self, session_id: str) -> ForecastSession:
        """
        Return the session for ``session_id``, creating it on first use.
        """
        session = self.sessions.get(session_id)
        if session is None:
            if len(self.sessions) >= self.max_size:
                evicted_id, evicted = self.sessions.popitem(last=False)
                evicted.close()
                logger.info(
                    "Evicted forecast session",
                    extra={"event": "session_evicted", "session_id": evicted_id},
                )
            session = ForecastSession(session_id, self.api_client)
            self.sessions[session_id] = session
        self.sessions.move_to_end(session_id)
        return session

    def clear(self):
        for session in self.sessions.values():
            session.close()
        self.sessions.clear()

    def __len__(self) -> int:
        return len(self.sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self.sessions
