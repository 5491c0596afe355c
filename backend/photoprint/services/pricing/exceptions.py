"""Pricing exceptions."""

from photoprint.services.exceptions import NotFoundError, ValidationError


class PrintSizeNotFound(NotFoundError):
    """Print size not found."""

    pass


class InvalidQuantity(ValidationError):
    """Quantity must be a positive integer."""

    pass
