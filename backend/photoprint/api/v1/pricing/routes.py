"""Price quote endpoint."""

from fastapi import APIRouter, HTTPException

from photoprint.api.v1.dependencies import PricingServiceDep
from photoprint.api.v1.schemas import CamelModel, Money
from photoprint.services.pricing import InvalidQuantity, PriceQuote, PrintSizeNotFound

router = APIRouter(tags=["pricing"])


class PriceQuoteResponse(CamelModel):
    print_size_id: int
    quantity: int
    unit_price: Money
    subtotal: Money
    discount_min_quantity: int | None

    @classmethod
    def from_quote(cls, quote: PriceQuote) -> "PriceQuoteResponse":
        return cls(
            print_size_id=quote.print_size_id,
            quantity=quote.quantity,
            unit_price=quote.unit_price,
            subtotal=quote.subtotal,
            discount_min_quantity=quote.discount_min_quantity,
        )


@router.get("/pricing/quote", response_model=PriceQuoteResponse, operation_id="getPriceQuote")
async def get_price_quote(
    size_id: int,
    quantity: int,
    service: PricingServiceDep,
) -> PriceQuoteResponse:
    """Unit price and subtotal for a quantity of one print size, volume discounts applied."""
    try:
        quote = await service.quote(size_id, quantity)
    except InvalidQuantity as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PrintSizeNotFound:
        raise HTTPException(status_code=404, detail="Print size not found")

    return PriceQuoteResponse.from_quote(quote)
