"""Customer-facing order endpoints."""

import structlog
from fastapi import APIRouter, HTTPException

from photoprint.api.v1.dependencies import OrderServiceDep
from photoprint.api.v1.orders.schemas import OrderStatusLookupRequest, OrderStatusLookupResponse
from photoprint.services.orders import OrderNotFound

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["orders"])


@router.post("/orders/status", response_model=OrderStatusLookupResponse, operation_id="lookupOrderStatus")
async def lookup_order_status(
    payload: OrderStatusLookupRequest,
    service: OrderServiceDep,
) -> OrderStatusLookupResponse:
    """Look up an order by number; the email must match the order's customer."""
    if not payload.email or not payload.order_number:
        raise HTTPException(status_code=400, detail="Email/Order Number required")

    try:
        order = await service.lookup_for_customer(payload.order_number, payload.email)
    except OrderNotFound:
        raise HTTPException(status_code=404, detail="Order not found")

    return OrderStatusLookupResponse.from_model(order)
