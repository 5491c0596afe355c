"""Uploads API package."""

from photoprint.api.v1.uploads.routes import router

__all__ = ["router"]
