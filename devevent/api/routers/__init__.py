"""
API routers package for the devevent service.
"""

from devevent.api.routers import health

__all__ = ["health"]
