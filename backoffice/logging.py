"""Logging configuration using structlog."""

import logging
import sys

import structlog
from structlog.typing import Processor

from backoffice.config import settings


def _renderer(debug: bool) -> Processor:
    if debug:
        return structlog.dev.ConsoleRenderer(colors=True, exception_formatter=structlog.dev.plain_traceback)
    return structlog.processors.JSONRenderer()


def configure_logging(*, debug: bool | None = None) -> None:
    """Configure structlog and route stdlib logging through the same renderer.

    Debug mode renders colored key-value lines for humans; otherwise one JSON object
    per line is emitted for log shipping. Output goes to stderr so that CLI commands
    can print issued numbers on stdout.

    Call this early in application startup (main.py and cli.py).
    """
    debug = settings.debug if debug is None else debug

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S" if debug else "iso", utc=not debug),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if not debug:
        shared_processors.append(structlog.processors.format_exc_info)

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

    formatter = structlog.stdlib.ProcessorFormatter(
        # Records from plain stdlib loggers (uvicorn, sqlalchemy, alembic) get the shared chain too
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(debug),
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    # echo=False everywhere; keep SQLAlchemy at WARNING so only errors surface
    for name in ("sqlalchemy.engine", "sqlalchemy.pool"):
        logging.getLogger(name).setLevel(logging.WARNING)


_configured = False


def setup_logging() -> None:
    """Setup logging once. Safe to call multiple times."""
    global _configured
    if not _configured:
        configure_logging()
        _configured = True
