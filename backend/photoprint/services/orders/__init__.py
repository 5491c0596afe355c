"""Order services package."""

from photoprint.services.orders.exceptions import InvalidOrderStatus, OrderNotFound
from photoprint.services.orders.order_service import OrderService, OrderStats

__all__ = [
    "InvalidOrderStatus",
    "OrderNotFound",
    "OrderService",
    "OrderStats",
]
