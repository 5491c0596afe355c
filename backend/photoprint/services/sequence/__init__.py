"""Order number allocation."""

from photoprint.services.sequence.allocator import (
    FALLBACK_PREFIX,
    SequenceAllocator,
    is_fallback_order_number,
)

__all__ = [
    "FALLBACK_PREFIX",
    "SequenceAllocator",
    "is_fallback_order_number",
]
