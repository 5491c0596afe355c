"""Orphaned upload recovery package."""

from photoprint.services.recovery.exceptions import RecoveryPersistError
from photoprint.services.recovery.orphan_recovery_service import (
    RECOVERED_ITEM_TYPE,
    OrphanRecoveryService,
    RecoveryReport,
)

__all__ = [
    "RECOVERED_ITEM_TYPE",
    "OrphanRecoveryService",
    "RecoveryPersistError",
    "RecoveryReport",
]
