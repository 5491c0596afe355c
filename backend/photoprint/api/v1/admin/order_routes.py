"""Admin order management endpoints."""

import structlog
from fastapi import APIRouter, HTTPException

from photoprint.api.v1.dependencies import OrderServiceDep
from photoprint.api.v1.orders.schemas import (
    BulkStatusUpdateRequest,
    BulkStatusUpdateResponse,
    OrderStatsResponse,
    StatusUpdateRequest,
    StatusUpdateResponse,
)
from photoprint.services.exceptions import ValidationError
from photoprint.services.orders import InvalidOrderStatus, OrderNotFound

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["admin"])


@router.get("/orders/stats", response_model=OrderStatsResponse, operation_id="getOrderStats")
async def get_order_stats(service: OrderServiceDep) -> OrderStatsResponse:
    """Order counts per status, orders from the last 7 days and revenue."""
    stats = await service.get_stats()
    return OrderStatsResponse.from_stats(stats)


@router.put("/orders/bulk-status", response_model=BulkStatusUpdateResponse, operation_id="bulkUpdateOrderStatus")
async def bulk_update_order_status(
    payload: BulkStatusUpdateRequest,
    service: OrderServiceDep,
) -> BulkStatusUpdateResponse:
    """Set the same status on several orders."""
    try:
        updated = await service.bulk_update_status(payload.order_ids, payload.status)
    except InvalidOrderStatus:
        raise HTTPException(status_code=400, detail="Invalid status")
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return BulkStatusUpdateResponse(success=True, updated_count=updated, new_status=payload.status)


@router.put("/orders/{order_id}/status", response_model=StatusUpdateResponse, operation_id="updateOrderStatus")
async def update_order_status(
    order_id: int,
    payload: StatusUpdateRequest,
    service: OrderServiceDep,
) -> StatusUpdateResponse:
    """Set the status of a single order."""
    try:
        order = await service.update_status(order_id, payload.status)
    except InvalidOrderStatus:
        raise HTTPException(status_code=400, detail="Invalid status")
    except OrderNotFound:
        raise HTTPException(status_code=404, detail="Order not found")

    return StatusUpdateResponse(success=True, status=order.status)
