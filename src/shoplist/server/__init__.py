"""ASGI application factory and dependencies for the Shoplist server."""

from shoplist.server.app import create_app

__all__ = ["create_app"]
