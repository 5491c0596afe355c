"""Admin API package.

- cleanup_routes: orphaned upload recovery trigger
- order_routes: order status management and statistics
"""

from fastapi import APIRouter

from photoprint.api.v1.admin.cleanup_routes import router as cleanup_router
from photoprint.api.v1.admin.order_routes import router as order_router

router = APIRouter(prefix="/admin")

router.include_router(cleanup_router)
router.include_router(order_router)

__all__ = ["router"]
