from typing import Optional
from fastapi import Depends, Header, Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
import uuid

from devevent.infrastructure.database.mongodb import MongoDBConnectionManager
from devevent.utils.logger import get_request_logger, LoggerAdapter


def get_correlation_id(
    x_correlation_id: Optional[str] = Header(None)
) -> str:
    """
    Extract correlation ID from headers or generate a new one.

    Args:
        x_correlation_id: Correlation ID from request header

    Returns:
        str: Correlation ID
    """
    return x_correlation_id or str(uuid.uuid4())


def get_request_logger_dependency(
    correlation_id: str = Depends(get_correlation_id)
) -> LoggerAdapter:
    """
    Provide a configured logger for the request context.

    Args:
        correlation_id: Request correlation ID

    Returns:
        LoggerAdapter: Configured logger
    """
    return get_request_logger(__name__, correlation_id)


def get_connection_manager(request: Request) -> MongoDBConnectionManager:
    """
    Provide the application's connection manager.

    The manager is created once per application in the lifespan handler.

    Args:
        request: Current request

    Returns:
        MongoDBConnectionManager: Shared connection manager
    """
    return request.app.state.connection_manager


async def get_db_connection(
    manager: MongoDBConnectionManager = Depends(get_connection_manager)
) -> AsyncMongoClient:
    """
    Provide the shared MongoDB client, connecting on first use.

    Raises:
        ConfigurationError: If MONGODB_URI is not set
        DatabaseConnectionError: If the server cannot be reached
    """
    return await manager.acquire_connection()


async def get_database(
    manager: MongoDBConnectionManager = Depends(get_connection_manager),
    client: AsyncMongoClient = Depends(get_db_connection)
) -> AsyncDatabase:
    """Provide the configured MongoDB database."""
    return client[manager.database_name]
