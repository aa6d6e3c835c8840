"""Structured logging setup.

Uses structlog over the standard library logger with JSON or console output.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from trade_journal.config import LogFormat, get_settings


def setup_logging() -> None:
    """Configure structured logging.

    Level and renderer come from settings.
    """
    settings = get_settings()

    log_level = getattr(logging, settings.log_level)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.log_format == LogFormat.JSON:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structured logger.

    Args:
        name: Logger name. Defaults to the calling module.

    Returns:
        Bound structured logger.
    """
    return structlog.get_logger(name)


def log_trade_recorded(
    logger: structlog.stdlib.BoundLogger,
    *,
    trade_id: str,
    direction: str,
    result: str | None,
    pl_dollar: float | None = None,
    **kwargs: Any,
) -> None:
    """Log one journal entry after enrichment."""
    logger.info(
        "trade_recorded",
        trade_id=trade_id,
        direction=direction,
        result=result,
        pl_dollar=pl_dollar,
        **kwargs,
    )


def log_performance_summary(
    logger: structlog.stdlib.BoundLogger,
    *,
    total_trades: int,
    win_rate: float,
    profit_factor: float,
    **kwargs: Any,
) -> None:
    """Log a computed performance summary."""
    logger.info(
        "performance_summary",
        total_trades=total_trades,
        win_rate=win_rate,
        profit_factor=profit_factor,
        **kwargs,
    )


def log_invalid_input(
    logger: structlog.stdlib.BoundLogger,
    *,
    field: str,
    reason: str,
    **kwargs: Any,
) -> None:
    """Log rejected input."""
    logger.warning(
        "invalid_input",
        field=field,
        reason=reason,
        **kwargs,
    )
