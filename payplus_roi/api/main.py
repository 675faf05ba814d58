"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from payplus_roi.api.middleware import RequestIDMiddleware, MetricsMiddleware
from payplus_roi.api.v1 import adjustments, calculation, calculations
from payplus_roi.infrastructure.database.session import init_db
from payplus_roi.infrastructure.observability.logging import setup_logging
from payplus_roi.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Pay+ ROI Estimator",
        description="Payment cost comparison and annual benefit estimation service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(calculation.router, prefix="/v1", tags=["calculation"])
    app.include_router(adjustments.router, prefix="/v1", tags=["adjustments"])
    app.include_router(calculations.router, prefix="/v1", tags=["calculations"])

    return app


app = create_app()
