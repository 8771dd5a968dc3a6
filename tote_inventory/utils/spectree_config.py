"""Spectree configuration for request validation and OpenAPI docs."""

from flask import Flask
from spectree import SpecTree

# Global Spectree instance imported by the API modules.
# configure_spectree() must run before any API module is imported.
api: SpecTree = None  # type: ignore


def configure_spectree(app: Flask) -> SpecTree:
    """Create the SpecTree instance bound to ``app``; docs are served at /api/docs."""
    global api

    api = SpecTree(
        backend_name="flask",
        app=app,
        title="Tote Inventory API",
        version="1.0.0",
        description="Storage tote, rack and item tracking",
        path="api/docs",
        validation_error_status=400,
    )

    return api
