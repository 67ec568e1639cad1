# backend/boothmedia/main.py
"""
FastAPI application entry point for the booth media core.

The lifespan owns the BoothRuntime: it configures logging, loads booth
settings, starts the job orchestrator and periodic workers, and tears them
down on shutdown. Routers only reach shared state through the runtime
dependency.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from . import __version__
from .config import Settings, settings
from .logging_config import configure_logging
from .middleware import ErrorHandlerMiddleware
from .routers import capture_routers, notification_routers, video_routers
from .runtime import BoothRuntime


def build_lifespan(app_settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Handle application startup and shutdown"""
        configure_logging(app_settings.log_level, app_settings.log_file)
        logger.info(f"Starting booth media API ({app_settings.environment})")

        runtime = BoothRuntime(app_settings)
        await runtime.start()
        app.state.runtime = runtime

        try:
            yield
        finally:
            logger.info("Shutting down booth media API")
            await runtime.stop()
            app.state.runtime = None

    return lifespan


def create_app(app_settings: Settings = settings) -> FastAPI:
    app = FastAPI(
        title="Booth Media API",
        description="Background AI photo generation and video tasks for event photo booths",
        version=__version__,
        lifespan=build_lifespan(app_settings),
    )

    # Order matters: last added = first executed
    app.add_middleware(
        ErrorHandlerMiddleware,
        debug_mode=app_settings.environment == "development",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(capture_routers.router, prefix="/api", tags=["captures"])
    app.include_router(notification_routers.router, prefix="/api", tags=["notifications"])
    app.include_router(video_routers.router, prefix="/api", tags=["video"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        runtime = getattr(app.state, "runtime", None)
        return {
            "status": "healthy",
            "version": __version__,
            "runtime": runtime.get_status() if runtime else None,
        }

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "boothmedia.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.value.lower(),
    )
