"""Database models."""

from sqlmodel import SQLModel

from photoprint.models.enums import DeliveryMethod, OrderStatus
from photoprint.models.order import Order, OrderItem
from photoprint.models.pricing import PrintSize, VolumeDiscount
from photoprint.models.sequence import SEQUENCE_ROW_ID, OrderSequence

__all__ = [
    "SQLModel",
    "Order",
    "OrderItem",
    "OrderSequence",
    "SEQUENCE_ROW_ID",
    "PrintSize",
    "VolumeDiscount",
    "OrderStatus",
    "DeliveryMethod",
]
