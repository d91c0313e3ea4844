"""FastAPI application factory"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from interest_calc.api.middleware import RequestIDMiddleware, MetricsMiddleware
from interest_calc.api.v1 import fields, rates
from interest_calc.domain.exceptions import CorruptedSettingError
from interest_calc.infrastructure.database.session import init_db
from interest_calc.infrastructure.observability.logging import setup_logging
from interest_calc.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield
    # Teardown: abort any in-flight rate fetch so its result is dropped
    refresher = getattr(app.state, "rates_refresher", None)
    if refresher is not None:
        refresher.cancel()


async def corrupted_setting_handler(request: Request, exc: CorruptedSettingError) -> JSONResponse:
    """Persisted data is unreadable: surface it instead of falling back to defaults"""
    logging.error(
        f"Corrupted setting: {exc}",
        extra={"request_id": getattr(request.state, "request_id", "unknown"), "setting_key": exc.key},
    )
    return JSONResponse(status_code=500, content={"detail": str(exc)})


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Interest Rate Calculator",
        description="Compounding interest calculator with live currency substitution",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(CorruptedSettingError, corrupted_setting_handler)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(fields.router, prefix="/v1", tags=["fields"])
    app.include_router(rates.router, prefix="/v1", tags=["rates"])

    return app


app = create_app()
