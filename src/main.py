"""ASGI entry point for the storefront catalog service."""

from src.application import create_app

app = create_app()

__all__ = ["app"]
