"""
Infrastructure package for the devevent service.

This package contains implementation details and external integrations,
currently the MongoDB connection layer.
"""
