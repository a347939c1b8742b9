"""REST API layer for itemledger.

Exposes:
    create_app -- FastAPI application factory.
"""

from itemledger.api.app import create_app

__all__ = ["create_app"]
