"""Volume-discount price lookup."""

from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from photoprint.models.pricing import PrintSize, VolumeDiscount
from photoprint.services.pricing.exceptions import InvalidQuantity, PrintSizeNotFound


@dataclass
class PriceQuote:
    """Unit price and subtotal for a quantity of one print size."""

    print_size_id: int
    quantity: int
    unit_price: Decimal
    subtotal: Decimal
    discount_min_quantity: int | None  # Tier that applied, None for base price


class PricingService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def quote(self, print_size_id: int, quantity: int) -> PriceQuote:
        """Price `quantity` prints of a size using the best matching volume tier.

        The tier with the highest min_quantity not exceeding the quantity
        wins; below the lowest tier the size's base price applies.
        """
        if quantity < 1:
            raise InvalidQuantity(f"Quantity must be at least 1, got {quantity}")

        size = await self.session.get(PrintSize, print_size_id)
        if not size:
            raise PrintSizeNotFound()

        stmt = (
            select(VolumeDiscount)
            .where(
                VolumeDiscount.print_size_id == print_size_id,
                VolumeDiscount.min_quantity <= quantity,
            )
            .order_by(VolumeDiscount.min_quantity.desc())  # type: ignore[attr-defined]
            .limit(1)
        )
        result = await self.session.execute(stmt)
        tier = result.scalars().first()

        unit_price = Decimal(str(tier.price if tier else size.base_price))
        return PriceQuote(
            print_size_id=print_size_id,
            quantity=quantity,
            unit_price=unit_price,
            subtotal=unit_price * quantity,
            discount_min_quantity=tier.min_quantity if tier else None,
        )
