"""Order domain exceptions."""

from photoprint.services.exceptions import NotFoundError, ValidationError


class OrderNotFound(NotFoundError):
    """Order not found."""

    pass


class InvalidOrderStatus(ValidationError):
    """Requested status is not a known order status."""

    pass
