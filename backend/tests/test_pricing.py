from decimal import Decimal

import pytest

from photoprint.models import PrintSize, VolumeDiscount


@pytest.fixture
def print_size(seed) -> PrintSize:
    size = PrintSize(
        name="10x15",
        base_price=Decimal("5.90"),
        discounts=[
            VolumeDiscount(min_quantity=50, price=Decimal("4.90")),
            VolumeDiscount(min_quantity=100, price=Decimal("3.90")),
        ],
    )
    seed(size)
    return size


@pytest.mark.parametrize(
    ("quantity", "unit_price", "tier"),
    [
        (1, 5.9, None),
        (49, 5.9, None),
        (50, 4.9, 50),
        (99, 4.9, 50),
        (100, 3.9, 100),
        (1000, 3.9, 100),
    ],
)
def test_quote_uses_best_volume_tier(client, print_size, quantity, unit_price, tier):
    response = client.get("/api/v1/pricing/quote", params={"size_id": print_size.id, "quantity": quantity})

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["unitPrice"] == unit_price
    assert body["discountMinQuantity"] == tier
    assert body["subtotal"] == pytest.approx(unit_price * quantity)


def test_quote_validation(client, print_size):
    zero = client.get("/api/v1/pricing/quote", params={"size_id": print_size.id, "quantity": 0})
    unknown = client.get("/api/v1/pricing/quote", params={"size_id": 999, "quantity": 5})

    assert zero.status_code == 400
    assert unknown.status_code == 404
