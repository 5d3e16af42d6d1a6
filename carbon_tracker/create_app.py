"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from carbon_tracker.api import (
    analytics_router,
    auth_router,
    emissions_router,
    users_router,
)
from carbon_tracker.core.config import get_config
from carbon_tracker.database.base import get_db_url, get_engine_kw
from carbon_tracker.database.session_manager.db_session import Database
from carbon_tracker.utils.exceptions import CarbonTrackerError

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


def register_routers(app: FastAPI):
    """Register all API routers."""
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(emissions_router)
    app.include_router(analytics_router)


def register_exception_handlers(app: FastAPI):
    """Map application failures to JSON responses."""

    @app.exception_handler(CarbonTrackerError)
    async def carbon_tracker_exception_handler(
        request: Request, exc: CarbonTrackerError
    ):
        logger.warning(
            f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.detail}"
        )
        headers = (
            {"WWW-Authenticate": "Bearer"}
            if exc.status_code == status.HTTP_401_UNAUTHORIZED
            else None
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=headers,
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logger.error(f"HTTPException occurred: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code, content={"detail": str(exc.detail)}
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "detail": jsonable_errors(exc),
                "message": "Validation error",
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}: {exc}",
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """Validation errors without the raw ctx objects pydantic attaches."""
    return [
        {key: value for key, value in error.items() if key in ("type", "loc", "msg")}
        for error in exc.errors()
    ]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    Handles database initialization and cleanup.
    """
    logger.info("Application startup")
    async_db_url = get_db_url(app.state.config)

    Database.init(async_db_url, engine_kw=get_engine_kw(async_db_url))
    logger.info("Initialized database")

    try:
        yield
    finally:
        await Database.dispose()
        logger.info("Application shutdown")


def get_app(config_file: str) -> FastAPI:
    """
    Application factory function.

    Args:
        config_file: Configuration file name (e.g., "production.toml")

    Returns:
        Configured FastAPI application instance
    """
    config = get_config(config_file)
    api_config = config.data.get("api", {})

    app = FastAPI(
        title=api_config.get("title", "Carbon Footprint Tracker API"),
        description=api_config.get(
            "description", "Emission logging, CO2e quantification and analytics"
        ),
        version=api_config.get("version", "1.0.0"),
        debug=api_config.get("debug", False),
        lifespan=lifespan,
        generate_unique_id_function=lambda route: (
            f"{route.tags[0]}-{route.name}" if route.tags else route.name
        ),
    )

    app.state.config = config

    register_routers(app)
    register_exception_handlers(app)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": app.title,
            "version": app.version,
            "docs": "/docs",
            "redoc": "/redoc",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "carbon-footprint-tracker"}

    origins = [
        "http://localhost:3000",  # For local development
        "http://127.0.0.1:3000",
    ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app
