"""Order number allocation from the shared sequence counter.

Numbers come from a single `order_sequence` row that is only ever changed by
an atomic UPDATE ... RETURNING, so concurrent callers can never read the same
pre-increment value. When the database cannot be reached the allocator
degrades to a timestamp-based `REC-<millis>` identifier instead of failing.
"""

import structlog
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from photoprint.config import settings
from photoprint.models.sequence import SEQUENCE_ROW_ID, OrderSequence
from photoprint.utils.datetime_utils import Clock, utc_now

logger = structlog.get_logger(__name__)

FALLBACK_PREFIX = "REC-"


def is_fallback_order_number(order_number: str) -> bool:
    """Check if an order number was produced in degraded (no database) mode."""
    return order_number.startswith(FALLBACK_PREFIX)


class SequenceAllocator:
    """Hands out unique, strictly increasing order numbers."""

    def __init__(
        self,
        session: AsyncSession,
        *,
        start_value: int | None = None,
        clock: Clock = utc_now,
    ):
        self.session = session
        self.start_value = settings.order_sequence_start if start_value is None else start_value
        self.clock = clock

    async def allocate(self) -> str:
        """Allocate the next order number.

        The increment is committed immediately, so a number is never handed
        out twice even if the caller's later work fails.
        """
        try:
            value = await self._increment()
            if value is None:
                value = await self._create_counter()
        except (SQLAlchemyError, OSError) as e:
            await self._rollback_quietly()
            fallback = f"{FALLBACK_PREFIX}{int(self.clock().timestamp() * 1000)}"
            logger.error(
                "Order sequence unavailable, using fallback order number",
                order_number=fallback,
                error=str(e),
            )
            return fallback

        logger.debug("Allocated order number", order_number=value)
        return str(value)

    async def _increment(self) -> int | None:
        """Atomically bump the counter and return the new value (None if no row)."""
        stmt = (
            update(OrderSequence)
            .where(OrderSequence.id == SEQUENCE_ROW_ID)  # type: ignore[arg-type]
            .values(current_value=OrderSequence.current_value + 1)
            .returning(OrderSequence.current_value)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        value: int | None = result.scalar_one_or_none()
        await self.session.commit()
        return value

    async def _create_counter(self) -> int:
        """Create the counter row on first use.

        Another allocator may create it at the same time; the primary key
        conflict is resolved by falling back to the atomic increment.
        """
        try:
            self.session.add(OrderSequence(id=SEQUENCE_ROW_ID, current_value=self.start_value))
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            logger.info("Order sequence created concurrently, retrying increment")
            value = await self._increment()
            if value is None:
                raise
            return value

        logger.info("Initialized order sequence", start_value=self.start_value)
        return self.start_value

    async def _rollback_quietly(self) -> None:
        try:
            await self.session.rollback()
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Rollback after sequence failure failed", error=str(e))
