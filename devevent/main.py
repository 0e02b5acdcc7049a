from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import time
import uuid
from contextlib import asynccontextmanager

from devevent.config import get_settings
from devevent.infrastructure.database.mongodb import MongoDBConnectionManager
from devevent.utils.logger import configure_logging, get_logger
from devevent.utils.exceptions import AppException, DatabaseError
from devevent.api.routers import health


# Configure logging
configure_logging()
logger = get_logger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler for startup and shutdown events.

    Creates the application's connection manager unless one was injected,
    optionally connects eagerly, and closes the connection on shutdown.

    Args:
        app: FastAPI application instance
    """
    logger.info(f"Starting {settings.SERVICE_NAME} service")

    manager = app.state.connection_manager
    if manager is None:
        manager = MongoDBConnectionManager.from_settings(settings)
        app.state.connection_manager = manager

    if settings.CONNECT_ON_STARTUP:
        try:
            await manager.acquire_connection()
        except DatabaseError as e:
            # Requests retry the connection on demand
            logger.warning(f"Database unavailable at startup: {e.message}")

    yield

    logger.info(f"Shutting down {settings.SERVICE_NAME} service")
    await manager.close()


def create_application(
    connection_manager: Optional[MongoDBConnectionManager] = None
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        connection_manager: Manager to use instead of one built from settings

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title=f"{settings.SERVICE_NAME.capitalize()} API",
        description="DevEvent service API",
        version=settings.VERSION,
        lifespan=lifespan,
        debug=settings.DEBUG
    )
    app.state.connection_manager = connection_manager

    configure_middleware(app)
    register_routers(app)
    configure_exception_handlers(app)

    return app


def configure_middleware(app: FastAPI) -> None:
    """
    Configure middleware for the application.

    Args:
        app: FastAPI application instance
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request timing middleware
    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        return response

    # Correlation ID middleware
    @app.middleware("http")
    async def add_correlation_id(request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id
        return response


def register_routers(app: FastAPI) -> None:
    """
    Register API routers with the application.

    Args:
        app: FastAPI application instance
    """
    app.include_router(health.router, tags=["Health"])


def configure_exception_handlers(app: FastAPI) -> None:
    """
    Configure global exception handlers.

    Args:
        app: FastAPI application instance
    """
    @app.exception_handler(AppException)
    async def handle_app_exception(request: Request, exc: AppException):
        logger.error(
            f"Application exception: {exc.message}",
            extra={
                "status_code": exc.status_code,
                "details": exc.details,
                "path": request.url.path
            }
        )

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.message,
                "details": exc.details,
                "status_code": exc.status_code
            }
        )

    @app.exception_handler(Exception)
    async def handle_unhandled_exception(request: Request, exc: Exception):
        logger.exception(
            f"Unhandled exception: {str(exc)}",
            extra={"path": request.url.path}
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "message": str(exc) if settings.DEBUG else "An unexpected error occurred",
                "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR
            }
        )


# Create application instance
app = create_application()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "devevent.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
