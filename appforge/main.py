"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from appforge import __version__
from appforge.api.middleware import RequestLoggingMiddleware
from appforge.api.v1.router import router as v1_router
from appforge.config import settings
from appforge.core.exceptions import AppForgeError, InvalidBlueprintError, RunNotFoundError
from appforge.core.session import get_run_manager
from appforge.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def status_for(exc: AppForgeError) -> int:
    """HTTP status for an application error."""
    if isinstance(exc, InvalidBlueprintError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    if isinstance(exc, RunNotFoundError):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    configure_logging()
    logger.info(
        "application.starting",
        version=__version__,
        environment=settings.app_env,
        model=settings.anthropic_model,
    )

    yield

    # Shutdown
    removed = await get_run_manager().cleanup_expired()
    logger.info("application.shutdown", expired_runs=removed)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="AppForge API",
        description="Generates Next.js application file trees from structured blueprints",
        version=__version__,
        docs_url="/docs" if settings.app_debug else None,
        redoc_url="/redoc" if settings.app_debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_development else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers
    @app.exception_handler(AppForgeError)
    async def appforge_error_handler(request: Request, exc: AppForgeError) -> JSONResponse:
        """Handle application-specific errors."""
        code = status_for(exc)
        if code >= 500:
            logger.error("request.app_error", path=request.url.path, error=exc.message)
        return JSONResponse(
            status_code=code,
            content={
                "error": {
                    "code": type(exc).__name__.upper(),
                    "message": exc.message,
                    "details": exc.details,
                }
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected errors."""
        logger.error(
            "unhandled_exception",
            error=str(exc),
            path=request.url.path,
            exc_info=True,
        )

        message = str(exc) if settings.is_development else "An unexpected error occurred"
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": {"code": "INTERNAL_ERROR", "message": message}},
        )

    # Include routers
    app.include_router(v1_router)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "appforge.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
    )
