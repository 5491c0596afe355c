"""Orphan recovery exceptions."""

from photoprint.services.exceptions import ServiceError


class RecoveryPersistError(ServiceError):
    """Recovery order could not be written after files were already moved.

    The moved files stay in the order folder; only the order record is
    missing.
    """

    def __init__(self, order_number: str, moved_files: list[str], reason: str):
        self.order_number = order_number
        self.moved_files = moved_files
        super().__init__(
            f"Failed to save recovery order {order_number} for {len(moved_files)} moved files: {reason}"
        )
