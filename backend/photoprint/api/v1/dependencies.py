"""FastAPI dependencies for service injection."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from photoprint.db import get_session
from photoprint.services.orders import OrderService
from photoprint.services.pricing import PricingService
from photoprint.services.recovery import OrphanRecoveryService
from photoprint.services.sequence import SequenceAllocator
from photoprint.services.storage import UploadStorage
from photoprint.services.uploads import UploadService
from photoprint.utils.datetime_utils import Clock, utc_now

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_clock() -> Clock:
    """Get the clock used for age and timestamp calculations."""
    return utc_now


ClockDep = Annotated[Clock, Depends(get_clock)]


def get_upload_storage() -> UploadStorage:
    """Get an UploadStorage rooted at the configured upload directory."""
    return UploadStorage()


UploadStorageDep = Annotated[UploadStorage, Depends(get_upload_storage)]


async def get_order_service(session: SessionDep, clock: ClockDep) -> OrderService:
    """Get an OrderService instance with the current session."""
    return OrderService(session, clock=clock)


async def get_pricing_service(session: SessionDep) -> PricingService:
    """Get a PricingService instance with the current session."""
    return PricingService(session)


async def get_upload_service(storage: UploadStorageDep) -> UploadService:
    """Get an UploadService writing into the upload storage."""
    return UploadService(storage)


async def get_sequence_allocator(session: SessionDep, clock: ClockDep) -> SequenceAllocator:
    """Get a SequenceAllocator bound to the current session."""
    return SequenceAllocator(session, clock=clock)


async def get_recovery_service(
    session: SessionDep,
    storage: UploadStorageDep,
    allocator: Annotated[SequenceAllocator, Depends(get_sequence_allocator)],
    clock: ClockDep,
) -> OrphanRecoveryService:
    """Get an OrphanRecoveryService wired to the session, storage and allocator."""
    return OrphanRecoveryService(session, storage, allocator, clock=clock)


# Type aliases for cleaner endpoint signatures
OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
PricingServiceDep = Annotated[PricingService, Depends(get_pricing_service)]
UploadServiceDep = Annotated[UploadService, Depends(get_upload_service)]
RecoveryServiceDep = Annotated[OrphanRecoveryService, Depends(get_recovery_service)]
