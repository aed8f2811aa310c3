"""
LaunchPath - Main Application Entry Point

Guided onboarding backend: projects, phased checklists and progress tracking.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from launchpath.api.errors import error_detail, status_for_error
from launchpath.core.config import get_settings
from launchpath.core.exceptions import InfrastructureError, LaunchPathError
from launchpath.core.logger import logger, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    logger.info(f"Starting LaunchPath in {settings.ENVIRONMENT} mode...")

    from launchpath.infrastructure.local.database import init_db

    await init_db()

    # Start background scheduler for periodic jobs
    from launchpath.services.background_scheduler import (
        start_background_scheduler,
        stop_background_scheduler,
    )

    await start_background_scheduler()

    yield

    # Shutdown
    logger.info("Shutting down LaunchPath...")
    await stop_background_scheduler()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="LaunchPath",
        description="Guided onboarding: projects, phased checklists and progress tracking",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(LaunchPathError)
    async def handle_launchpath_error(request: Request, exc: LaunchPathError):
        if isinstance(exc, InfrastructureError):
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(
            status_code=status_for_error(exc),
            content={"detail": error_detail(exc)},
        )

    # Include routers
    from launchpath.api import auth, notifications, projects, tasks, users

    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(projects.router, prefix="/api/projects", tags=["projects"])
    app.include_router(tasks.router, prefix="/api/tasks", tags=["tasks"])
    app.include_router(notifications.router, prefix="/api/notifications", tags=["notifications"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "version": "0.1.0",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
