from typing import Any, Dict, Optional
from fastapi import status


class AppException(Exception):
    """Base application exception class."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code to return
            details: Additional error details
        """
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class DatabaseError(AppException):
    """Base exception for database connection lifecycle errors."""
    pass


class ConfigurationError(DatabaseError):
    """
    Raised when required database configuration is missing.

    Fatal: retrying without fixing the environment fails the same way.
    """

    def __init__(
        self,
        setting: str,
        message: Optional[str] = None
    ):
        """
        Initialize configuration error.

        Args:
            setting: Name of the missing or invalid setting
            message: Custom error message
        """
        super().__init__(
            message=message or f"Please define the {setting} environment variable (e.g. in .env)",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"setting": setting}
        )
        self.setting = setting


class DatabaseConnectionError(DatabaseError):
    """
    Raised when establishing the database connection fails.

    Retryable: the next connection request starts a new attempt.
    """

    def __init__(
        self,
        message: str = "Database connection failed",
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize database connection error."""
        super().__init__(
            message=message,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details=details
        )
