"""FastAPI application factory"""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from tipstream import __version__
from tipstream.core.config import get_settings
from tipstream.core.dependencies import close_gemini_generator
from tipstream.core.logging import setup_logging
from tipstream.routers import analytics_router, tips_router

logger = logging.getLogger(__name__)

# Track server start time
_start_time: float = time.time()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle startup and shutdown"""
    global _start_time
    _start_time = time.time()

    settings = get_settings()

    # Startup
    logger.info("Starting tipstream API server")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"AI tier generation: {'enabled' if settings.ai_enabled else 'disabled'}")

    yield

    # Shutdown
    logger.info("Shutting down tipstream API server")
    try:
        await close_gemini_generator()
    except Exception as e:
        logger.exception(f"Error during shutdown: {e}")


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    settings = get_settings()

    # Setup logging first
    setup_logging(settings)

    app = FastAPI(
        title="tipstream API",
        description="Tip tier suggestions and payment analytics for live streams",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(tips_router.router)
    app.include_router(analytics_router.router)

    # Root endpoint
    @app.get("/")
    async def root():
        """Root endpoint - minimal service info"""
        return {"service": "tipstream-api", "status": "running"}

    # Liveness check
    @app.get("/health")
    async def health():
        """Liveness check, no external dependency"""
        return {
            "status": "healthy",
            "uptime_seconds": int(time.time() - _start_time),
            "ai_enabled": settings.ai_enabled,
        }

    # Ping endpoint
    @app.api_route("/ping", methods=["GET", "HEAD"], response_class=PlainTextResponse)
    async def ping():
        """Ping endpoint"""
        return "pong"

    logger.info("FastAPI application configured")

    return app
