"""Main FastAPI application for the forecast announcer service."""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from forecast_announcer.api.endpoints import router as forecast_router
from forecast_announcer.config import (
    DEBUG, HOST, PORT, SERVICE_VERSION, get_openai_api_key
)
from forecast_announcer.errors import ConfigurationError
from forecast_announcer.logging_config import configure_logging
from forecast_announcer.pipeline import ForecastAnnouncer

configure_logging()
logger = logging.getLogger(__name__)


def create_app(announcer: Optional[ForecastAnnouncer] = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        announcer: Prebuilt pipeline; when omitted it is built at startup
            from the environment

    Returns:
        Configured FastAPI application instance
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager."""
        if announcer is None:
            app.state.announcer = ForecastAnnouncer.create(openai_api_key=get_openai_api_key())
        else:
            app.state.announcer = announcer

        logger.info("Starting Forecast Announcer Service")
        try:
            yield
        finally:
            logger.info("Shutting down Forecast Announcer Service")
            await app.state.announcer.aclose()

    app = FastAPI(
        title="Forecast Announcer Service",
        description="Five day weather forecasts narrated in sports announcer style",
        version=SERVICE_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(forecast_router)

    return app


# Create app instance for uvicorn
app = create_app()


def main() -> None:
    """Main entry point for the application."""
    try:
        get_openai_api_key()
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"Server is running on http://{HOST}:{PORT}")
    uvicorn.run(
        "forecast_announcer.main:app" if DEBUG else app,
        host=HOST,
        port=PORT,
        reload=DEBUG,
        log_level="info" if not DEBUG else "debug"
    )


if __name__ == "__main__":
    main()
