from typing import Any, Dict, Optional
import time

from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from devevent.config import Settings
from devevent.infrastructure.database.connection import ConnectionManager, Connector
from devevent.utils.logger import get_logger
from devevent.utils.exceptions import DatabaseError

logger = get_logger(__name__)


async def connect_mongo(uri: str, options: Dict[str, Any]) -> AsyncMongoClient:
    """
    Open a MongoDB client.

    With ``buffer_commands`` disabled the client is only returned after the
    server has answered a ping, so callers never hold a client whose
    operations would wait for a server that is not there.

    Args:
        uri: MongoDB connection URI
        options: Client options; ``buffer_commands`` is consumed here and the
            rest are passed to ``AsyncMongoClient``

    Returns:
        Connected MongoDB client

    Raises:
        PyMongoError: If the URI is invalid or the server cannot be reached
    """
    client_options = dict(options)
    buffer_commands = client_options.pop("buffer_commands", True)

    client = AsyncMongoClient(uri, **client_options)
    if buffer_commands:
        return client

    try:
        await client.aconnect()
        await client.admin.command("ping")
    except PyMongoError:
        await client.close()
        raise

    logger.info("Successfully connected to MongoDB")
    return client


class MongoDBConnectionManager(ConnectionManager[AsyncMongoClient]):
    """
    MongoDB flavour of the connection cache.

    Builds the client options from settings and adds the health checks used
    by the API.
    """

    def __init__(
        self,
        connection_uri: Optional[str],
        database_name: str,
        server_selection_timeout: int = 5000,
        connect_timeout: int = 10000,
        app_name: Optional[str] = None,
        connector: Connector = connect_mongo,
        **kwargs
    ):
        """
        Initialize the MongoDB connection manager.

        Args:
            connection_uri: MongoDB connection URI, None when unconfigured
            database_name: Name of the database handed to request handlers
            server_selection_timeout: Server selection timeout (ms)
            connect_timeout: Connection timeout (ms)
            app_name: Application name reported to the server
            connector: Driver connect function, replaced in tests
            **kwargs: Additional client options
        """
        self.database_name = database_name

        connection_options = {
            "serverSelectionTimeoutMS": server_selection_timeout,
            "connectTimeoutMS": connect_timeout,
            **kwargs
        }
        if app_name:
            connection_options["appname"] = app_name

        super().__init__(
            connection_uri=connection_uri,
            connector=connector,
            connection_options=connection_options,
            uri_setting="MONGODB_URI"
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "MongoDBConnectionManager":
        return cls(
            connection_uri=settings.MONGODB_URI,
            database_name=settings.MONGODB_DATABASE,
            server_selection_timeout=settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
            connect_timeout=settings.MONGODB_CONNECT_TIMEOUT_MS,
            app_name=settings.SERVICE_NAME,
            **kwargs
        )

    async def ping(self) -> bool:
        """
        Test connection to MongoDB.

        Returns:
            True if the server answered

        Raises:
            DatabaseError: If no connection can be acquired
            PyMongoError: If the ping itself fails
        """
        client = await self.acquire_connection()
        await client.admin.command("ping")
        return True

    async def health_check(self) -> Dict[str, Any]:
        """
        Check MongoDB health status.

        Never raises; failures are reported in the result.

        Returns:
            Dictionary containing health check results
        """
        start_time = time.time()
        try:
            client = await self.acquire_connection()
            server_info = await client.server_info()
        except DatabaseError as e:
            return {
                "status": "error",
                "message": e.message,
                "stats": self.get_stats()
            }
        except PyMongoError as e:
            logger.error(f"MongoDB health check failed: {str(e)}")
            return {
                "status": "error",
                "message": str(e),
                "stats": self.get_stats()
            }

        return {
            "status": "ok",
            "latency_ms": round((time.time() - start_time) * 1000, 2),
            "version": server_info.get("version", "unknown"),
            "database": self.database_name,
            "stats": self.get_stats()
        }
