"""Admin trigger for orphaned upload recovery."""

import structlog
from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from photoprint.api.v1.admin.schemas import CleanupResponse
from photoprint.api.v1.dependencies import RecoveryServiceDep
from photoprint.api.v1.schemas import ErrorResponse
from photoprint.services.exceptions import ServiceError

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["admin"])


@router.post(
    "/cleanup",
    response_model=CleanupResponse,
    response_model_exclude_none=True,
    responses={500: {"model": ErrorResponse}},
    operation_id="recoverOrphanedUploads",
)
async def recover_orphaned_uploads(service: RecoveryServiceDep) -> CleanupResponse | JSONResponse:
    """Move old unclaimed uploads into a new ON_HOLD recovery order.

    Runs synchronously. Returns recoveredCount=0 when nothing needed recovery.
    """
    try:
        report = await service.run()
    except (ServiceError, SQLAlchemyError, OSError) as e:
        logger.exception("Cleanup failed")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error="Cleanup failed", message=str(e)).model_dump(),
        )

    return CleanupResponse.from_report(report)
