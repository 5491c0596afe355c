from datetime import timedelta
from decimal import Decimal

import pytest

from photoprint.models import DeliveryMethod, Order, OrderItem, OrderStatus
from photoprint.services.exceptions import ValidationError
from photoprint.services.orders import InvalidOrderStatus, OrderService

from conftest import NOW


def _order(order_number: str, status: OrderStatus, total: str = "0", **kwargs) -> Order:
    return Order(
        order_number=order_number,
        status=status,
        total_amount=Decimal(total),
        created_at=kwargs.pop("created_at", NOW - timedelta(days=1)),
        **kwargs,
    )


def test_status_lookup(client, seed):
    order = _order(
        "10005",
        OrderStatus.PROCESSING,
        "37.50",
        customer_email="Petra.Novak@example.com",
        delivery_method=DeliveryMethod.COURIER,
        items=[
            OrderItem(type="PRINT", name="13x18 matte", quantity=3, price=Decimal("12.50"), subtotal=Decimal("37.50")),
        ],
    )
    seed(order)

    response = client.post(
        "/api/v1/orders/status",
        json={"email": "  petra.novak@EXAMPLE.com ", "orderNumber": " 10005 "},
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["orderNumber"] == "10005"
    assert body["status"] == "PROCESSING"
    assert body["totalAmount"] == 37.5
    assert body["deliveryMethod"] == "COURIER"
    assert [(i["name"], i["quantity"], i["subtotal"]) for i in body["items"]] == [("13x18 matte", 3, 37.5)]


def test_status_lookup_hides_orders_of_other_customers(client, seed):
    seed(_order("10005", OrderStatus.PENDING, customer_email="owner@example.com"))

    wrong_email = client.post("/api/v1/orders/status", json={"email": "someone@example.com", "orderNumber": "10005"})
    unknown = client.post("/api/v1/orders/status", json={"email": "owner@example.com", "orderNumber": "99999"})

    assert wrong_email.status_code == 404
    assert unknown.status_code == 404
    assert wrong_email.json()["detail"] == "Order not found"


def test_status_lookup_requires_both_fields(client):
    response = client.post("/api/v1/orders/status", json={"email": "owner@example.com"})

    assert response.status_code == 400


def test_update_single_status(client, seed):
    order = _order("10010", OrderStatus.ON_HOLD)
    seed(order)

    response = client.put(f"/api/v1/admin/orders/{order.id}/status", json={"status": "PROCESSING"})

    assert response.status_code == 200, response.text
    assert response.json() == {"success": True, "status": "PROCESSING"}


def test_update_status_validation(client, seed):
    order = _order("10010", OrderStatus.PENDING)
    seed(order)

    invalid = client.put(f"/api/v1/admin/orders/{order.id}/status", json={"status": "SHIPPED"})
    missing = client.put("/api/v1/admin/orders/999/status", json={"status": "COMPLETED"})

    assert invalid.status_code == 400
    assert missing.status_code == 404


def test_bulk_status_update(client, seed):
    orders = [_order(f"1002{i}", OrderStatus.PENDING) for i in range(3)]
    seed(*orders)

    response = client.put(
        "/api/v1/admin/orders/bulk-status",
        json={"orderIds": [str(orders[0].id), orders[1].id], "status": "COMPLETED"},
    )

    assert response.status_code == 200, response.text
    assert response.json() == {"success": True, "updatedCount": 2, "newStatus": "COMPLETED"}

    stats = client.get("/api/v1/admin/orders/stats").json()["stats"]
    assert stats["completed"] == 2
    assert stats["pending"] == 1


def test_bulk_status_update_validation(client):
    no_ids = client.put("/api/v1/admin/orders/bulk-status", json={"orderIds": [], "status": "COMPLETED"})
    bad_status = client.put("/api/v1/admin/orders/bulk-status", json={"orderIds": [1], "status": "LOST"})

    assert no_ids.status_code == 400
    assert no_ids.json()["detail"] == "No order IDs provided"
    assert bad_status.status_code == 400
    assert bad_status.json()["detail"] == "Invalid status"


@pytest.mark.anyio
async def test_bulk_update_without_ids_is_a_validation_error(session):
    service = OrderService(session)

    with pytest.raises(ValidationError) as exc_info:
        await service.bulk_update_status([], "LOST")

    assert not isinstance(exc_info.value, InvalidOrderStatus)


def test_order_stats(client, seed):
    seed(
        _order("10001", OrderStatus.DRAFT, "99"),
        _order("10002", OrderStatus.PENDING, "10.50"),
        _order("10003", OrderStatus.PROCESSING, "20"),
        _order("10004", OrderStatus.COMPLETED, "30", created_at=NOW - timedelta(days=30)),
        _order("10005", OrderStatus.CANCELLED, "40"),
        _order("10006", OrderStatus.ON_HOLD, "0"),
    )

    response = client.get("/api/v1/admin/orders/stats")

    assert response.status_code == 200, response.text
    assert response.json()["stats"] == {
        "draft": 1,
        "pending": 1,
        "processing": 1,
        "completed": 1,
        "cancelled": 1,
        "onHold": 1,
        "total": 6,
        "recentOrders": 4,
        "totalRevenue": 60.5,
    }
