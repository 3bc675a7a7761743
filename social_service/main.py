"""ASGI entrypoint: ``uvicorn social_service.main:app``."""

from social_service.app.main import app

__all__ = ["app"]
