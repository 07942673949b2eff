from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from forecast_chart.api import routes as page_routes
from forecast_chart.api.v1 import routes as v1_routes
from forecast_chart.config import get_settings
from forecast_chart.middleware.dependency_container import container
from forecast_chart.middleware.request_tracker import RequestTrackerMiddleware
from forecast_chart.utils.logger import setup_logger

logger = setup_logger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Forecast Chart...")

    await container.initialize()
    app.state.container = container

    yield

    logger.info("Shutting down Forecast Chart...")

    await container.close()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

app.add_middleware(RequestTrackerMiddleware)

Instrumentator().instrument(app).expose(app, endpoint="/prometheus-metrics")

app.include_router(page_routes.router)
app.include_router(v1_routes.router)

if __name__ == "__main__":
    uvicorn.run(
        "forecast_chart.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=settings.log_level.lower()
    )
