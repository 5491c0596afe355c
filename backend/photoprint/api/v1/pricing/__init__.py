"""Pricing API package."""

from photoprint.api.v1.pricing.routes import router

__all__ = ["router"]
