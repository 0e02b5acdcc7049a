"""
DevEvent service package.

Root package of the service: configuration, the FastAPI application
factory and the shared MongoDB connection layer.
"""

__version__ = "0.1.0"
