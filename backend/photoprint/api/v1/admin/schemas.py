"""API schemas for admin endpoints."""

from photoprint.api.v1.schemas import CamelModel
from photoprint.services.recovery import RecoveryReport


class CleanupResponse(CamelModel):
    """Result of an orphaned upload recovery run.

    order_number is omitted when nothing needed recovery.
    """

    success: bool
    recovered_count: int
    order_number: str | None = None
    failed_files: list[str] = []
    sequence_degraded: bool = False
    message: str

    @classmethod
    def from_report(cls, report: RecoveryReport) -> "CleanupResponse":
        return cls(
            success=True,
            recovered_count=report.recovered_count,
            order_number=report.order_number,
            failed_files=report.failed_files,
            sequence_degraded=report.sequence_degraded,
            message=report.message,
        )
