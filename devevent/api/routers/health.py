from fastapi import APIRouter, Depends, status
from typing import Dict, Any
from datetime import datetime, timezone

from devevent.config import get_settings
from devevent.infrastructure.database.mongodb import MongoDBConnectionManager
from devevent.utils.logger import LoggerAdapter
from devevent.api.dependencies import get_connection_manager, get_request_logger_dependency

router = APIRouter(prefix="/health")


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
    response_description="Service health status"
)
async def get_health() -> Dict[str, Any]:
    """
    Basic health check endpoint. Does not touch the database.

    Returns:
        Dict: Basic service health information
    """
    settings = get_settings()
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get(
    "/detailed",
    status_code=status.HTTP_200_OK,
    summary="Detailed health check",
    response_description="Detailed service health status"
)
async def get_detailed_health(
    manager: MongoDBConnectionManager = Depends(get_connection_manager),
    logger: LoggerAdapter = Depends(get_request_logger_dependency)
) -> Dict[str, Any]:
    """
    Detailed health check endpoint including database status.

    Acquiring the connection here connects lazily if nothing has yet.

    Args:
        manager: Shared connection manager
        logger: Request logger

    Returns:
        Dict: Detailed service health information
    """
    logger.info("Performing detailed health check")
    settings = get_settings()

    dependencies = {
        "database": await manager.health_check()
    }

    overall_status = "ok"
    if any(dep["status"] != "ok" for dep in dependencies.values()):
        overall_status = "error"

    return {
        "status": overall_status,
        "service": settings.SERVICE_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "dependencies": dependencies
    }
