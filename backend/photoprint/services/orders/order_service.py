"""Order management service.

Status lookups for customers plus the admin operations on order status.
"""

from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal

import structlog
from sqlalchemy import func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import select

from photoprint.models.enums import REVENUE_STATUSES, OrderStatus
from photoprint.models.order import Order
from photoprint.services.exceptions import ValidationError
from photoprint.services.orders.exceptions import InvalidOrderStatus, OrderNotFound
from photoprint.utils.datetime_utils import Clock, utc_now

logger = structlog.get_logger(__name__)

RECENT_ORDERS_WINDOW = timedelta(days=7)


@dataclass
class OrderStats:
    """Aggregated order counts for the admin dashboard."""

    by_status: dict[OrderStatus, int]
    total: int
    recent_orders: int
    total_revenue: Decimal


def parse_status(value: str | None) -> OrderStatus:
    """Convert a raw status string to OrderStatus."""
    try:
        return OrderStatus(value)
    except ValueError:
        raise InvalidOrderStatus(f"Invalid status: {value!r}")


def normalize_email(email: str | None) -> str:
    """Normalize email for comparison (trim + lowercase)."""
    return (email or "").strip().lower()


class OrderService:
    """Service for order lookups and admin status management."""

    def __init__(self, session: AsyncSession, *, clock: Clock = utc_now):
        self.session = session
        self.clock = clock

    async def lookup_for_customer(self, order_number: str, email: str) -> Order:
        """Find an order by number, verifying it belongs to the given email.

        Unknown order and email mismatch are indistinguishable to the caller.
        """
        statement = (
            select(Order)
            .options(selectinload(Order.items))  # type: ignore[arg-type]
            .where(Order.order_number == order_number.strip())
        )
        result = await self.session.execute(statement)
        order = result.scalars().first()

        if not order or normalize_email(order.customer_email) != normalize_email(email):
            raise OrderNotFound()
        return order

    async def update_status(self, order_id: int, status: str) -> Order:
        """Set status of a single order."""
        new_status = parse_status(status)
        order = await self.session.get(Order, order_id)
        if not order:
            raise OrderNotFound()

        previous = order.status
        order.status = new_status
        order.updated_at = self.clock()
        await self.session.commit()

        logger.info("Order status changed", order_id=order_id, previous_status=previous, status=new_status)
        return order

    async def bulk_update_status(self, order_ids: list[int], status: str) -> int:
        """Set status of several orders at once. Returns number of updated orders."""
        if not order_ids:
            raise ValidationError("No order IDs provided")
        new_status = parse_status(status)

        stmt = (
            update(Order)
            .where(Order.id.in_(order_ids))  # type: ignore[union-attr]
            .values(status=new_status, updated_at=self.clock())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()

        updated: int = result.rowcount
        logger.info("Bulk order status change", requested=len(order_ids), updated=updated, status=new_status)
        return updated

    async def get_stats(self) -> OrderStats:
        """Count orders per status, recent orders and revenue."""
        counts_result = await self.session.execute(
            select(Order.status, func.count()).group_by(Order.status)  # type: ignore[arg-type]
        )
        counts = {OrderStatus(status): count for status, count in counts_result.all()}
        by_status = {status: counts.get(status, 0) for status in OrderStatus}

        recent_result = await self.session.execute(
            select(func.count())
            .select_from(Order)
            .where(
                Order.created_at >= self.clock() - RECENT_ORDERS_WINDOW,  # type: ignore[operator]
                Order.status != OrderStatus.DRAFT,
            )
        )
        recent_orders = recent_result.scalar() or 0

        revenue_result = await self.session.execute(
            select(func.coalesce(func.sum(Order.total_amount), 0)).where(
                Order.status.in_(REVENUE_STATUSES)  # type: ignore[attr-defined]
            )
        )
        total_revenue = Decimal(str(revenue_result.scalar() or 0))

        return OrderStats(
            by_status=by_status,
            total=sum(by_status.values()),
            recent_orders=recent_orders,
            total_revenue=total_revenue,
        )
