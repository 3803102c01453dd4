"""
SLA Checker - Main Application
==============================

Business-time SLA checking service.

Clean Architecture Layers:
- Interfaces: FastAPI controllers
- Application: Services and DTOs
- Domain: Entities, value objects and the SLA calculator
- Infrastructure: Holiday API client, YAML profile loader
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from sla_checker.config import Settings, settings as default_settings
from sla_checker.core import ApplicationException
from sla_checker.shared.api import CorrelationIDMiddleware, LoggingMiddleware
from sla_checker.shared.infrastructure.logging import get_logger, setup_logging
from sla_checker.sla.infrastructure import NagerHolidayClient, SLAProfileLoader
from sla_checker.sla.interfaces import sla_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager.

    STARTUP:
    1. Setup structured logging
    2. Load the SLA profile
    3. Create the holiday client (with its one-week cache)

    SHUTDOWN:
    1. Close the holiday client
    """
    settings: Settings = app.state.settings

    # === STARTUP ===
    setup_logging(settings.log_level, settings.environment)
    logger.info("Starting SLA Checker", extra={
        "version": settings.app_version,
        "environment": settings.environment
    })

    app.state.sla_profile = SLAProfileLoader(settings.sla_profile_path).load()

    holiday_client = NagerHolidayClient(
        base_url=settings.holiday_api_url,
        timeout=settings.holiday_timeout_seconds,
        max_retries=settings.holiday_max_retries,
    )
    app.state.holiday_provider = holiday_client

    logger.info("SLA Checker started successfully")

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info("Shutting down SLA Checker")
    holiday_client.close()
    logger.info("SLA Checker shutdown complete")


async def application_exception_handler(request: Request, exc: ApplicationException) -> JSONResponse:
    """Fallback for application errors a controller did not translate."""
    correlation_id = getattr(request.state, "correlation_id", "unknown")
    logger.error(
        "Unhandled application exception",
        extra={
            "correlation_id": correlation_id,
            "path": request.url.path,
            "method": request.method,
            "error_type": type(exc).__name__,
            "error_message": exc.message
        }
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": exc.message,
            "error_type": type(exc).__name__,
            "correlation_id": correlation_id,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application."""
    settings = settings or default_settings

    app = FastAPI(
        title="SLA Checker API",
        description="""
    ## Business-time SLA checking

    **Endpoints:**
    - `POST /sla/check` - Compute an SLA deadline and time remaining
    - `GET /sla/profile` - The server's SLA profile
    - `POST /sla/profile/check` - Check an SLA against the server's profile
    - `GET /sla/holidays/{year}/{country_code}` - Public holidays (cached)
    - `GET /health` - Service health
    """,
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.settings = settings

    # Last added runs outermost: the correlation ID is set before requests are logged
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(CorrelationIDMiddleware)

    app.add_exception_handler(ApplicationException, application_exception_handler)
    app.include_router(sla_router)

    @app.get("/health", tags=["Health"])
    async def health_check(request: Request):
        """Health check endpoint for load balancers and orchestrators."""
        provider = getattr(request.app.state, "holiday_provider", None)
        return {
            "status": "healthy",
            "version": settings.app_version,
            "environment": settings.environment,
            "checks": {
                "holiday_source": "configured" if provider is not None else "not_configured",
                "sla_profile": "loaded" if hasattr(request.app.state, "sla_profile") else "not_loaded"
            }
        }

    return app


app = create_app()


# === Development Entry Point ===

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "sla_checker.main:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.environment == "development",
        log_level="info"
    )
