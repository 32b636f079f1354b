"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from serenity import __version__
from serenity.api.agenda import router as agenda_router
from serenity.api.assistant import router as assistant_router
from serenity.api.auth import router as auth_router
from serenity.api.deps import close_services
from serenity.api.profile import router as profile_router
from serenity.api.stress import router as stress_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Remote clients are created lazily on first use and closed on shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting Serenity API...")
    yield
    await close_services()
    logger.info("Shutting down Serenity API...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Serenity API",
        description=(
            "Personal wellness companion. Tracks a weekly self-reported stress "
            "level, keeps an agenda of reminders, asks a conversational assistant "
            "for stress-reduction advice, reports the weather and maintains a "
            "profile with photo. Live documents are streamed as Server-Sent Events."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.include_router(auth_router)
    application.include_router(profile_router)
    application.include_router(stress_router)
    application.include_router(agenda_router)
    application.include_router(assistant_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "serenity"}

    return application


app = create_app()
