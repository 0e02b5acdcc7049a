"""
MongoDB connection support.

This package provides the pymongo-backed connector and the MongoDB flavour
of the connection manager, including ping and health checks.
"""

from devevent.infrastructure.database.mongodb.client import MongoDBConnectionManager, connect_mongo

__all__ = ['MongoDBConnectionManager', 'connect_mongo']
