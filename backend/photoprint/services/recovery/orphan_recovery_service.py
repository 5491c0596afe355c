"""Orphaned upload recovery.

Customers upload photos one by one before submitting an order, so the upload
root accumulates loose files. Files that are older than the retention
threshold and not referenced by any OrderItem are moved into a fresh order
folder and recorded under a single ON_HOLD "recovery order", so that nothing
a customer uploaded is silently lost or deleted.

Flow per run: scan -> classify -> allocate -> move -> persist -> report.
"""

import json
import stat
from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from photoprint.config import settings
from photoprint.models.enums import DeliveryMethod, OrderStatus
from photoprint.models.order import Order, OrderItem
from photoprint.services.recovery.exceptions import RecoveryPersistError
from photoprint.services.sequence import SequenceAllocator, is_fallback_order_number
from photoprint.services.storage import UploadDirectoryUnavailable, UploadStorage
from photoprint.utils.datetime_utils import Clock, from_timestamp_ns, utc_now

logger = structlog.get_logger(__name__)

RECOVERED_ITEM_TYPE = "RECOVERED"

# Synthetic customer identity of recovery orders
RECOVERY_CUSTOMER = {
    "customer_name": "SYSTEM RECOVERY",
    "customer_first_name": "SYSTEM",
    "customer_last_name": "RECOVERY",
    "customer_phone": "-",
    "customer_email": "admin@localhost",
}


@dataclass
class RecoveryReport:
    """Outcome of a single recovery run."""

    recovered_count: int
    message: str
    order_number: str | None = None
    failed_files: list[str] = field(default_factory=list)
    sequence_degraded: bool = False


class OrphanRecoveryService:
    """Moves orphaned uploads into a recovery order."""

    def __init__(
        self,
        session: AsyncSession,
        storage: UploadStorage,
        allocator: SequenceAllocator,
        *,
        max_age: timedelta | None = None,
        clock: Clock = utc_now,
    ):
        self.session = session
        self.storage = storage
        self.allocator = allocator
        self.max_age = max_age if max_age is not None else timedelta(hours=settings.recovery_max_age_hours)
        self.clock = clock

    async def run(self) -> RecoveryReport:
        """Run one recovery pass over the upload root."""
        try:
            entries = await self.storage.list_root_entries()
        except UploadDirectoryUnavailable as e:
            logger.info("Upload directory missing, nothing to recover", error=str(e))
            return RecoveryReport(recovered_count=0, message="Uploads directory empty or not found")

        orphans = await self._find_orphans(entries)
        if not orphans:
            logger.info("No orphaned uploads found", scanned=len(entries))
            return RecoveryReport(recovered_count=0, message="No lost files found.")

        order_number = await self.allocator.allocate()
        degraded = is_fallback_order_number(order_number)

        await self.storage.ensure_folder(order_number)
        moved, failed = await self._move_files(orphans, order_number)

        if moved:
            await self._save_recovery_order(order_number, moved)
            message = f"Recovered {len(moved)} files into Order #{order_number}"
        else:
            message = f"Failed to move {len(failed)} lost files; no recovery order created"

        logger.info(
            "Orphan recovery complete",
            order_number=order_number,
            recovered=len(moved),
            failed=len(failed),
            sequence_degraded=degraded,
        )
        return RecoveryReport(
            recovered_count=len(moved),
            message=message,
            order_number=order_number,
            failed_files=failed,
            sequence_degraded=degraded,
        )

    async def _find_orphans(self, entries: list[str]) -> list[str]:
        """Select loose files older than max_age that no order item references."""
        now = self.clock()
        orphans: list[str] = []

        for name in entries:
            if name.startswith("."):
                continue

            try:
                st = await self.storage.stat(name)
            except OSError as e:
                logger.warning("Failed to stat upload, skipping", filename=name, error=str(e))
                continue

            # Order folders hold claimed files
            if stat.S_ISDIR(st.st_mode):
                continue

            age = now - from_timestamp_ns(st.st_mtime_ns)
            if age <= self.max_age:
                continue

            if await self._is_claimed(name):
                continue

            orphans.append(name)

        return orphans

    async def _is_claimed(self, filename: str) -> bool:
        """Check if any order item's files field mentions the filename."""
        stmt = (
            select(OrderItem.id)
            .where(OrderItem.files.contains(filename, autoescape=True))  # type: ignore[attr-defined]
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def _move_files(self, orphans: list[str], order_number: str) -> tuple[list[str], list[str]]:
        """Move orphans into the order folder. Returns (moved, failed) filenames."""
        moved: list[str] = []
        failed: list[str] = []

        for name in orphans:
            try:
                await self.storage.move_into(name, order_number)
            except OSError as e:
                logger.error("Failed to move orphan file", filename=name, order_number=order_number, error=str(e))
                failed.append(name)
                continue
            moved.append(name)

        return moved, failed

    async def _save_recovery_order(self, order_number: str, filenames: list[str]) -> Order:
        items = [
            OrderItem(
                type=RECOVERED_ITEM_TYPE,
                name=f"Lost File: {name}",
                quantity=1,
                price=Decimal("0"),
                subtotal=Decimal("0"),
                options=json.dumps({"isRecovered": True}),
                files=json.dumps([{"original": name, "server": f"{order_number}/{name}"}]),
            )
            for name in filenames
        ]
        order = Order(
            order_number=order_number,
            status=OrderStatus.ON_HOLD,
            delivery_method=DeliveryMethod.PICKUP,
            total_amount=Decimal("0"),
            notes=f"Automatically recovered {len(filenames)} lost files. Found by system cleanup.",
            items=items,
            **RECOVERY_CUSTOMER,
        )

        try:
            self.session.add(order)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to save recovery order, moved files left in place",
                order_number=order_number,
                moved_files=filenames,
                error=str(e),
            )
            raise RecoveryPersistError(order_number, filenames, str(e)) from e

        logger.info("Created recovery order", order_id=order.id, order_number=order_number, items=len(items))
        return order
