"""
API layer package for the devevent service.

This package contains the FastAPI dependencies and routers, including the
dependency that hands request handlers the shared database connection.
"""

from devevent.api.dependencies import (
    get_connection_manager,
    get_db_connection,
    get_database,
)

__all__ = [
    "get_connection_manager",
    "get_db_connection",
    "get_database",
]
