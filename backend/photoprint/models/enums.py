"""Enum definitions for database models."""

from enum import StrEnum


class OrderStatus(StrEnum):
    """Lifecycle status of a storefront order."""

    DRAFT = "DRAFT"
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    ON_HOLD = "ON_HOLD"  # Needs operator attention (e.g. recovered files)


class DeliveryMethod(StrEnum):
    """How the finished prints reach the customer."""

    PICKUP = "PICKUP"
    COURIER = "COURIER"
    POST = "POST"


# Statuses whose orders count towards revenue
REVENUE_STATUSES = frozenset({OrderStatus.PENDING, OrderStatus.PROCESSING, OrderStatus.COMPLETED})
