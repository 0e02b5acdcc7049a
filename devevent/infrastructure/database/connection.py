import asyncio
import inspect
import time
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, TypeVar

from devevent.utils.logger import get_logger
from devevent.utils.exceptions import ConfigurationError, DatabaseConnectionError

logger = get_logger(__name__)

# Generic type for database connection
T = TypeVar('T')

# Driver entry point: connect(uri, options) -> connection
Connector = Callable[[str, Dict[str, Any]], Awaitable[T]]


class ConnectionState(str, Enum):
    """Lifecycle states of a cached connection."""
    EMPTY = "empty"
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


class ConnectionManager(Generic[T]):
    """
    Lazy, de-duplicated database connection cache.

    The first caller of ``acquire_connection`` starts a single connect
    attempt; every caller that arrives while it is in flight awaits the same
    attempt and observes the same outcome. A successful handle is cached for
    the lifetime of the manager. A failed attempt is forgotten so the next
    call tries again.

    Construct one manager per application and pass it to whatever needs a
    connection; there is no module-level instance.
    """

    def __init__(
        self,
        connection_uri: Optional[str],
        connector: Connector,
        connection_options: Optional[Dict[str, Any]] = None,
        uri_setting: str = "MONGODB_URI"
    ):
        """
        Initialize the connection manager. No I/O happens here.

        Args:
            connection_uri: URI for database connection, None when unconfigured
            connector: Async driver function called as ``connector(uri, options)``
            connection_options: Additional options passed to the connector
            uri_setting: Name of the setting that provides the URI, used in errors
        """
        self.connection_uri = connection_uri
        self.uri_setting = uri_setting
        # Operations must never queue behind a connection that is not ready
        self.connection_options = {**(connection_options or {}), "buffer_commands": False}
        self._connector = connector

        self._connection: Optional[T] = None
        self._pending: Optional[asyncio.Task] = None
        self._state = ConnectionState.EMPTY

        self.stats = {
            "connect_attempts": 0,
            "connect_failures": 0,
            "last_connection_error": None,
            "last_successful_connection": None
        }

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    async def acquire_connection(self) -> T:
        """
        Return the cached connection, establishing it on first use.

        Returns:
            The established database connection

        Raises:
            ConfigurationError: If the connection URI is not configured
            DatabaseConnectionError: If the connect attempt fails
        """
        if self._connection is not None:
            return self._connection

        if self._pending is None:
            if not self.connection_uri:
                logger.error(
                    f"Cannot connect to database: {self.uri_setting} is not set",
                    extra={"state": self._state.value}
                )
                raise ConfigurationError(self.uri_setting)

            self._pending = asyncio.create_task(self._connect(self.connection_uri))
            self._state = ConnectionState.PENDING

        # A cancelled waiter must not cancel the attempt other callers share
        return await asyncio.shield(self._pending)

    async def _connect(self, uri: str) -> T:
        task = asyncio.current_task()
        self.stats["connect_attempts"] += 1
        attempt = self.stats["connect_attempts"]
        logger.debug("Connecting to database", extra={"attempt": attempt})

        try:
            connection = await self._connector(uri, dict(self.connection_options))
        except asyncio.CancelledError:
            if self._pending is task:
                self._pending = None
                self._state = ConnectionState.EMPTY
            raise
        except Exception as e:
            if self._pending is task:
                self._pending = None
                self._state = ConnectionState.FAILED
            self.stats["connect_failures"] += 1
            self.stats["last_connection_error"] = {
                "timestamp": time.time(),
                "error": str(e)
            }
            logger.error(
                f"Database connection error: {str(e)}",
                extra={"attempt": attempt},
                exc_info=True
            )
            raise DatabaseConnectionError(
                f"Database connection failed: {str(e)}",
                details={"attempt": attempt}
            ) from e

        if self._pending is not task:
            # Closed while connecting; nobody owns this handle any more
            await _close_quietly(connection)
            raise DatabaseConnectionError("Connection manager was closed during connect")

        self._connection = connection
        self._state = ConnectionState.READY
        self.stats["last_successful_connection"] = time.time()
        logger.info("Database connection established", extra={"attempt": attempt})
        return connection

    async def close(self) -> None:
        """
        Drop the cached connection and cancel any attempt in flight.

        Intended for application shutdown. The manager returns to the empty
        state and can connect again afterwards.
        """
        pending, self._pending = self._pending, None
        if pending is not None and not pending.done():
            pending.cancel()

        connection, self._connection = self._connection, None
        self._state = ConnectionState.EMPTY

        if connection is not None:
            await _close_quietly(connection)
            logger.info("Closed database connection")

    def get_stats(self) -> Dict[str, Any]:
        """
        Get connection statistics.

        Returns:
            Dictionary containing connection statistics and the current state
        """
        return {**self.stats, "state": self._state.value}


async def _close_quietly(connection: Any) -> None:
    close = getattr(connection, "close", None)
    if close is None:
        return
    try:
        result = close()
        if inspect.isawaitable(result):
            await result
    except Exception as e:
        logger.warning(f"Error closing database connection: {str(e)}")
