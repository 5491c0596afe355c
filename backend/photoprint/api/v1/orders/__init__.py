"""Orders API package."""

from photoprint.api.v1.orders.order_routes import router

__all__ = ["router"]
