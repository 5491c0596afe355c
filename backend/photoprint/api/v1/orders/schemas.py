"""API schemas for order endpoints."""

from datetime import datetime

from pydantic import field_serializer

from photoprint.api.v1.schemas import CamelModel, Money
from photoprint.models.enums import DeliveryMethod, OrderStatus
from photoprint.models.order import Order, OrderItem
from photoprint.services.orders import OrderStats
from photoprint.utils.datetime_utils import to_api_timezone

# =============================================================================
# Request Schemas
# =============================================================================


class OrderStatusLookupRequest(CamelModel):
    """Customer order status lookup (both fields are required)."""

    email: str | None = None
    order_number: str | None = None


class StatusUpdateRequest(CamelModel):
    status: str


class BulkStatusUpdateRequest(CamelModel):
    order_ids: list[int] = []
    status: str


# =============================================================================
# Response Schemas
# =============================================================================


class OrderItemSummaryResponse(CamelModel):
    id: int
    name: str
    quantity: int
    subtotal: Money

    @classmethod
    def from_model(cls, item: OrderItem) -> "OrderItemSummaryResponse":
        return cls(
            id=item.id,  # type: ignore[arg-type]
            name=item.name,
            quantity=item.quantity,
            subtotal=item.subtotal,
        )


class OrderStatusLookupResponse(CamelModel):
    """What a customer sees when looking up their order."""

    order_number: str
    status: OrderStatus
    created_at: datetime
    total_amount: Money
    delivery_method: DeliveryMethod
    items: list[OrderItemSummaryResponse]

    @field_serializer("created_at")
    def serialize_created_at(self, dt: datetime) -> str:
        """Serialize datetime to API timezone."""
        localized_dt = to_api_timezone(dt)
        assert localized_dt is not None
        return localized_dt.isoformat()

    @classmethod
    def from_model(cls, order: Order) -> "OrderStatusLookupResponse":
        """Create response from Order model (items must be loaded)."""
        return cls(
            order_number=order.order_number,
            status=order.status,
            created_at=order.created_at,
            total_amount=order.total_amount,
            delivery_method=order.delivery_method,
            items=[OrderItemSummaryResponse.from_model(item) for item in order.items],
        )


class StatusUpdateResponse(CamelModel):
    success: bool
    status: OrderStatus


class BulkStatusUpdateResponse(CamelModel):
    success: bool
    updated_count: int
    new_status: OrderStatus


class OrderStatsData(CamelModel):
    draft: int
    pending: int
    processing: int
    completed: int
    cancelled: int
    on_hold: int
    total: int
    recent_orders: int
    total_revenue: Money


class OrderStatsResponse(CamelModel):
    stats: OrderStatsData

    @classmethod
    def from_stats(cls, stats: OrderStats) -> "OrderStatsResponse":
        return cls(
            stats=OrderStatsData(
                draft=stats.by_status[OrderStatus.DRAFT],
                pending=stats.by_status[OrderStatus.PENDING],
                processing=stats.by_status[OrderStatus.PROCESSING],
                completed=stats.by_status[OrderStatus.COMPLETED],
                cancelled=stats.by_status[OrderStatus.CANCELLED],
                on_hold=stats.by_status[OrderStatus.ON_HOLD],
                total=stats.total,
                recent_orders=stats.recent_orders,
                total_revenue=stats.total_revenue,
            )
        )
