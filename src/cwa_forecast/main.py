"""Main FastAPI application for the CWA forecast gateway."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cwa_forecast.api.endpoints import router as weather_router
from cwa_forecast.config import (
    HOST, PORT, DEBUG, SERVICE_NAME, SERVICE_VERSION, get_upstream_config
)
from cwa_forecast.logging_config import configure_logging

# Configure logging
configure_logging(debug=DEBUG)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    config = get_upstream_config()
    logger.info(f"Starting {SERVICE_NAME} against {config.base_url}")
    if not config.has_credential:
        logger.warning("CWA_API_KEY is not set; forecast requests will fail until it is configured")
    yield
    logger.info(f"Shutting down {SERVICE_NAME}")


async def not_found_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render routing errors; unknown paths and unsupported methods are both not found."""
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content={"error": "not found"})
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for errors escaping the route handlers."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "server error", "message": str(exc)})


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=SERVICE_NAME,
        description="REST API returning 36-hour city forecasts from the CWA open-data platform",
        version=SERVICE_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, not_found_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    # Include API routers
    app.include_router(weather_router)

    @app.get("/", tags=["root"])
    async def root() -> dict:
        """Service description and example usage."""
        return {
            "message": f"Welcome to the {SERVICE_NAME}",
            "endpoints": {
                "weatherById": "/api/weather/:id",
                "cities": "/api/cities",
                "health": "/api/health",
            },
            "usage": {
                "description": "Get a forecast by city ID or by Chinese location name",
                "examples": [
                    "/api/weather/taipei",
                    "/api/weather/kaohsiung",
                    "/api/weather/臺北市",
                ],
            },
        }

    return app


# Create app instance for uvicorn
app = create_app()


def main() -> None:
    """Main entry point for the application."""
    logger.info(f"Starting server on {HOST}:{PORT}")
    uvicorn.run(
        app,
        host=HOST,
        port=PORT,
        log_level="info" if not DEBUG else "debug"
    )


if __name__ == "__main__":
    main()
