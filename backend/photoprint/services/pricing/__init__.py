"""Pricing package."""

from photoprint.services.pricing.exceptions import InvalidQuantity, PrintSizeNotFound
from photoprint.services.pricing.pricing_service import PriceQuote, PricingService

__all__ = [
    "InvalidQuantity",
    "PriceQuote",
    "PricingService",
    "PrintSizeNotFound",
]
