"""
This module provides a dependency container for the application.
"""

from typing import Optional

import httpx

from forecast_chart.services.open_meteo import OpenMeteoClient
from forecast_chart.services.session_store import SessionStore
from forecast_chart.utils.logger import setup_logger

logger = setup_logger(__name__)


class DependencyContainer:
    """
    Dependency injection container for application services.

    Holds the shared Open-Meteo client and the per-page session store.
    """

    def __init__(self):
        """
        Initialize container with empty services.
        """
        self.api_client = None
        self.sessions = None

    async def initialize(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        max_sessions: Optional[int] = None,
    ):
        """
        Create the Open-Meteo client and the session store around it.
        """
        self.api_client = OpenMeteoClient(http_client)
        self.sessions = SessionStore(self.api_client, max_size=max_sessions)

        logger.info("All services initialized successfully")

    @property
    def initialized(self) -> bool:
        return self.sessions is not None

    async def close(self):
        """
        Release every session's chart and close the HTTP client.
        """
        if self.sessions is not None:
            self.sessions.clear()
        if self.api_client:
            await self.api_client.close()
            logger.info("Open-Meteo client closed")

        self.api_client = None
        self.sessions = None


container = DependencyContainer()
