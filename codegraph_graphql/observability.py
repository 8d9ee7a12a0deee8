"""
Structured logging setup.

structlog on top of stdlib logging. Level comes from the argument, then
LOG_LEVEL, then INFO.
"""

import logging
import os

import structlog
from structlog.processors import JSONRenderer

_CONFIGURED = False


def get_log_level() -> str:
    """Log level from environment"""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def configure_logging(level: str | None = None, json_format: bool = False) -> None:
    """
    Configure structured logging.

    Args:
        level: Log level name (None: LOG_LEVEL env var)
        json_format: Render JSON lines instead of console output
    """
    global _CONFIGURED

    if level is None:
        level = get_log_level()

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors.append(JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", level=log_level)
    logging.getLogger().setLevel(log_level)
    _CONFIGURED = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Structured logger (usually called with __name__)"""
    if not _CONFIGURED:
        configure_logging()
    return structlog.get_logger(name)
