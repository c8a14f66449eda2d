"""
Main FastAPI application entry point.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from skillmatch import __version__
from skillmatch.config import Settings, get_settings
from skillmatch.database import Database
from skillmatch.exceptions import AppError

logger = logging.getLogger(__name__)

SLOW_REQUEST_MS = 100


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.
    Verifies the database on startup and closes connections on shutdown.
    """
    settings = app.state.settings
    logger.info("Starting %s v%s (debug=%s)", settings.app_name, __version__, settings.debug)

    await app.state.database.connect()

    yield

    await app.state.database.close()
    logger.info("%s shutdown complete", settings.app_name)


class TimingMiddleware(BaseHTTPMiddleware):
    """Log requests slower than SLOW_REQUEST_MS."""

    async def dispatch(self, request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration = (time.perf_counter() - start) * 1000
        if duration > SLOW_REQUEST_MS:
            logger.warning("SLOW REQUEST: %s %s took %.0fms", request.method, request.url.path, duration)
        return response


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        """Render application errors as {"error", "detail"}."""
        content = {"error": exc.message}
        if exc.extra_detail:
            content["detail"] = exc.extra_detail
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Unknown routes and framework HTTP errors."""
        message = "Not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": message})

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        """The store failed in a way the core did not anticipate."""
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=503, content={"error": "Storage failure"})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": str(exc)},
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        description="Personnel, skills and project staffing API",
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
        openapi_url="/api/openapi.json" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.database = Database(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1|192\.168\.\d+\.\d+)(:\d+)?$",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(TimingMiddleware)

    # Include routers
    from skillmatch.routers import assignments, health, personnel, projects, skills

    app.include_router(health.router, tags=["Health"])
    app.include_router(personnel.router, prefix="/api", tags=["Personnel"])
    app.include_router(skills.router, prefix="/api", tags=["Skills"])
    app.include_router(projects.router, prefix="/api", tags=["Projects"])
    app.include_router(assignments.router, prefix="/api", tags=["Assignments"])

    register_exception_handlers(app)

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "skillmatch.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
    )
