"""
FastAPI dependency injection providers.

Routes receive the shared services through these functions so tests can
swap them with ``app.dependency_overrides``.
"""

from fastapi import Depends, Header, HTTPException

from forecast_chart.middleware.dependency_container import DependencyContainer, container
from forecast_chart.services.session_store import ForecastSession


def get_container() -> DependencyContainer:
    """
    Provide the application container.

    Raises:
        HTTPException: 503 while the application has not finished starting
    """
    if not container.initialized:
        raise HTTPException(status_code=503, detail="Service is starting up")
    return container


def get_session(
    session_id: str = Header(
        ...,
        alias="X-Session-ID",
        min_length=1,
        max_length=64,
        description="Id generated by the page when it loads",
    ),
    deps: DependencyContainer = Depends(get_container),
) -> ForecastSession:
    """
    Provide the forecast session of the calling page.
    """
    return deps.sessions.get(session_id)
