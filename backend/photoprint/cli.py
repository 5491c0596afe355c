"""Operator command line interface.

Usage:
    photoprint recover-orphans
    photoprint recover-orphans --upload-dir /app/data/uploads --max-age-hours 48
"""

import asyncio
from datetime import timedelta
from pathlib import Path

import click
import structlog

from photoprint.config import settings
from photoprint.db import async_session_maker, dispose_engine
from photoprint.logging import setup_logging
from photoprint.services.recovery import OrphanRecoveryService, RecoveryReport
from photoprint.services.sequence import SequenceAllocator
from photoprint.services.storage import UploadStorage

logger = structlog.get_logger(__name__)


async def _recover_orphans(upload_dir: Path, max_age: timedelta) -> RecoveryReport:
    try:
        async with async_session_maker() as session:
            service = OrphanRecoveryService(
                session,
                UploadStorage(upload_dir),
                SequenceAllocator(session),
                max_age=max_age,
            )
            return await service.run()
    finally:
        await dispose_engine()


@click.group()
def cli() -> None:
    """Photoprint storefront administration."""
    setup_logging()


@cli.command("recover-orphans")
@click.option(
    "--upload-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Upload root (defaults to UPLOAD_DIR setting).",
)
@click.option(
    "--max-age-hours",
    type=click.IntRange(min=0),
    default=None,
    help="Only recover files older than this (defaults to RECOVERY_MAX_AGE_HOURS).",
)
def recover_orphans(upload_dir: Path | None, max_age_hours: int | None) -> None:
    """Move old unclaimed uploads into a new recovery order."""
    hours = settings.recovery_max_age_hours if max_age_hours is None else max_age_hours
    report = asyncio.run(
        _recover_orphans(upload_dir or settings.upload_dir, timedelta(hours=hours)),
    )

    click.echo(report.message)
    if report.failed_files:
        click.echo(f"Failed to move: {', '.join(report.failed_files)}", err=True)
    if report.sequence_degraded:
        click.echo("Warning: order sequence unavailable, fallback order number used", err=True)


if __name__ == "__main__":
    cli()
