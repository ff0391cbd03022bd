"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from app.api.errors import register_error_handlers
from app.api.v1.router import api_router
from app.config import get_settings
from app.dependencies import create_engine, create_session_factory
from app.middleware import RequestContextMiddleware, SecurityHeadersMiddleware
from app.utils.logging import get_logger, setup_logging

SERVICE_NAME = "user-directory-service"
SERVICE_VERSION = "1.0.0"

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the database engine for the lifetime of the process."""
    settings = get_settings()
    engine = create_engine(settings)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    logger.info("service_started", environment=settings.environment, debug=settings.debug)
    try:
        yield
    finally:
        await engine.dispose()
        logger.info("service_stopped")


async def health_check() -> dict[str, str]:
    """Liveness: the process is up."""
    return {"status": "healthy", "service": SERVICE_NAME, "version": SERVICE_VERSION}


async def readiness_check(request: Request):
    """Readiness: the database answers a trivial query."""
    try:
        async with request.app.state.session_factory() as session:
            await session.execute(text("SELECT 1"))
        database = "ok"
    except Exception as exc:
        logger.warning("readiness_database_unavailable", error=str(exc))
        database = "unavailable"

    payload = {
        "status": "ready" if database == "ok" else "degraded",
        "checks": {"database": database},
    }
    if database != "ok":
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=payload)
    return payload


def create_application() -> FastAPI:
    """Application factory."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title="User Directory Service API",
        description="User registration, login, role-based access control and listing.",
        version=SERVICE_VERSION,
        lifespan=lifespan,
    )

    # Last added runs first: request context wraps everything else
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000"] if settings.is_development else [],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )
    app.add_middleware(SecurityHeadersMiddleware, hsts=settings.is_production)
    app.add_middleware(RequestContextMiddleware)

    register_error_handlers(app)

    app.include_router(api_router, prefix="/api/v1")
    app.add_api_route("/health", health_check, methods=["GET"], tags=["Health"])
    app.add_api_route("/ready", readiness_check, methods=["GET"], tags=["Health"])

    return app


app = create_application()
