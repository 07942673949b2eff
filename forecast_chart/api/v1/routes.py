"""
This module defines the routes for API version 1.
"""

from datetime import datetime, UTC

from fastapi import APIRouter, Depends, HTTPException, Request

from forecast_chart.api.v1.crud import ChartStateCRUD
from forecast_chart.config import get_settings
from forecast_chart.definitions.chart import ApiVersion
from forecast_chart.middleware.dependency_container import DependencyContainer
from forecast_chart.schemas.api_v1 import ChartStateResponse, HealthResponse, SearchRequest
from forecast_chart.services.session_store import ForecastSession
from forecast_chart.utils.dependencies import get_container, get_session
from forecast_chart.utils.logger import setup_logger

logger = setup_logger(__name__)
settings = get_settings()

router = APIRouter(prefix=f"/{ApiVersion.V1.value}", tags=[ApiVersion.V1.value])


@router.post("/search", response_model=ChartStateResponse)
async def search(
    request: Request,
    body: SearchRequest,
    session: ForecastSession = Depends(get_session),
) -> ChartStateResponse:
    """
    Search a city and return the outcome of that search.

    ``trigger`` is either ``click`` or the key pressed in the city input;
    only a click or ``Enter`` starts a search, otherwise the page's current
    state is returned unchanged. Lookup failures are reported through the
    ``error`` state, not through the HTTP status.
    """
    try:
        session.controls.set_input(body.city)
        outcome = await session.controls.trigger(body.trigger)
        if outcome is None:
            return ChartStateCRUD.transform_internal(session)
        return ChartStateCRUD.transform_outcome(outcome, session)

    except Exception as e:
        logger.error(
            "Error in search endpoint",
            extra={
                "event": "api_error",
                "api_version": "v1",
                "city": body.city,
                "session_id": session.session_id,
                "error": str(e),
                "error_type": type(e).__name__,
                "request_id": getattr(request.state, "request_id", None),
            },
        )
        raise HTTPException(
            status_code=500,
            detail={
                "error": "Internal server error",
                "detail": "Failed to run the forecast search",
                "request_id": getattr(request.state, "request_id", None),
            },
        ) from e


@router.get("/chart", response_model=ChartStateResponse)
async def get_chart(session: ForecastSession = Depends(get_session)) -> ChartStateResponse:
    """
    Return the page's current state and, after a successful search, the chart.
    """
    return ChartStateCRUD.transform_internal(session)


@router.get("/health", response_model=HealthResponse)
async def health_check(deps: DependencyContainer = Depends(get_container)) -> HealthResponse:
    """
    Health check endpoint that returns service status.
    """
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        timestamp=datetime.now(UTC).isoformat(),
        active_sessions=len(deps.sessions),
    )
