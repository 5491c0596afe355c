"""Logging configuration using structlog with colored console output."""

import logging
import sys

import structlog
from structlog.typing import Processor

from photoprint.config import settings


def configure_logging() -> None:
    """Configure structlog for human-readable colored console output.

    Both structlog loggers and stdlib loggers (uvicorn, sqlalchemy, redis)
    are routed through the same processor chain and rendered by
    ConsoleRenderer with colored levels and tracebacks.

    Call this early in application startup (main.py and cli.py).
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    console_renderer = structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.plain_traceback,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        # Foreign pre-chain handles logs from non-structlog loggers (uvicorn, sqlalchemy, etc.)
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            console_renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    # Reduce noise from third-party loggers
    logging.getLogger("httpx").setLevel(logging.INFO)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("redis").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.INFO)
    logging.getLogger("multipart").setLevel(logging.WARNING)

    # SQLAlchemy logs SQL queries at INFO level when echo=True
    logging.getLogger("sqlalchemy.engine.Engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)


# Allow re-import without side effects
_configured = False


def setup_logging() -> None:
    """Setup logging once. Safe to call multiple times."""
    global _configured
    if not _configured:
        configure_logging()
        _configured = True
