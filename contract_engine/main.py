"""FastAPI application entry point.

Main application setup with middleware, routing, and lifecycle management.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from contract_engine.api.clauses import router as clauses_router
from contract_engine.api.contracts import router as contracts_router
from contract_engine.api.schemas import ErrorResponse
from contract_engine.core.config import Settings, get_settings
from contract_engine.core.factory import ComponentFactory
from contract_engine.core.logging_config import setup_logging

# Initialize logging before importing other modules
setup_logging()
logger = logging.getLogger(__name__)

SERVICE_NAME = "contract-engine-api"
VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Handles startup and shutdown events for proper resource management.
    """
    settings: Settings = app.state.settings

    # Startup
    logger.info("Starting Contract Engine API...")
    if not settings.template_path.exists():
        logger.warning(f"Contract template not found at {settings.template_path}")

    yield

    # Shutdown
    logger.info("Shutting down Contract Engine API...")

    try:
        await app.state.factory.aclose()
        logger.info("HTTP clients closed")
    except Exception as e:
        logger.error(f"Error closing HTTP clients: {e}", exc_info=True)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings. If None, loads from environment.

    Returns:
        Configured FastAPI application instance.
    """
    try:
        settings = settings or get_settings()

        app = FastAPI(
            title="Contract Engine",
            description="Clause and placeholder resolution for lease contracts",
            version=VERSION,
            lifespan=lifespan,
            docs_url="/docs",
            redoc_url="/redoc",
        )

        # Store settings and components in app state
        app.state.settings = settings
        app.state.factory = ComponentFactory(settings)

        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.allowed_origin_list,
            allow_credentials=True,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["Content-Type", "Authorization", "X-Generation-Secret"],
        )

        app.include_router(clauses_router)
        app.include_router(contracts_router)
        logger.info("Registered clauses and contracts routers")

        # Health check endpoint
        @app.get("/health", tags=["health"])
        async def health_check():
            """Health check endpoint for load balancers and monitoring."""
            return {
                "status": "healthy",
                "service": SERVICE_NAME,
                "version": VERSION,
            }

        # Exception handlers
        @app.exception_handler(RequestValidationError)
        async def validation_exception_handler(request, exc):
            """Handle Pydantic validation errors."""
            logger.warning(f"Validation error: {exc.errors()}")
            return JSONResponse(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                content={
                    "detail": "Validation error",
                    "errors": jsonable_errors(exc),
                },
            )

        @app.exception_handler(Exception)
        async def general_exception_handler(request, exc):
            """Handle uncaught exceptions."""
            logger.error(f"Unhandled exception: {exc}", exc_info=True)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=ErrorResponse(
                    detail="Internal server error",
                    error_code="INTERNAL_ERROR",
                ).model_dump(),
            )

        logger.info("FastAPI application created successfully")
        return app

    except Exception as e:
        logger.error(f"Failed to create FastAPI app: {e}", exc_info=True)
        raise


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors with non-serializable context (exceptions) stringified."""
    from fastapi.encoders import jsonable_encoder

    return jsonable_encoder(exc.errors(), custom_encoder={Exception: str})


# Create the app instance
try:
    app = create_app()
except Exception as e:
    logger.error(f"Fatal error creating app: {e}", exc_info=True)
    raise


if __name__ == "__main__":
    import uvicorn

    try:
        settings = get_settings()
        logger.info("Starting uvicorn server on port 8000...")
        uvicorn.run(
            "contract_engine.main:app",
            host="0.0.0.0",
            port=8000,
            reload=True,
            log_level=settings.log_level.lower(),
        )
    except Exception as e:
        logger.error(f"Failed to start uvicorn: {e}", exc_info=True)
        raise
