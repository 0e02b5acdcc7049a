"""
Database connection management.

This package provides the lazily established, shared database connection
used by request handlers.
"""

from devevent.infrastructure.database.connection import ConnectionManager, ConnectionState

__all__ = ['ConnectionManager', 'ConnectionState']
