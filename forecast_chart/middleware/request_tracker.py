"""
This module adds request IDs and timing to every response.
"""

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from forecast_chart.utils.logger import setup_logger

logger = setup_logger(__name__)


def new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:8]}_{int(time.time() * 1000)}"


class RequestTrackerMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with an ID, measures processing time and logs
    the outcome.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = new_request_id()
        request.state.request_id = request_id
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.perf_counter() - start_time
            logger.error(
                "Request failed",
                extra={
                    "event": "request_failed",
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "process_time": process_time,
                    "error": str(e),
                    "error_type": type(e).__name__,
                },
            )
            return Response(
                content="Internal server error",
                status_code=500,
                headers={"X-Process-Time": f"{process_time:.3f}", "X-Request-ID": request_id},
            )

        process_time = time.perf_counter() - start_time
        response.headers["X-Process-Time"] = f"{process_time:.3f}"
        response.headers["X-Request-ID"] = request_id
        logger.debug(
            "Request completed",
            extra={
                "event": "request_completed",
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "process_time": process_time,
            },
        )
        return response
