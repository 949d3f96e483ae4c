"""
Structured logging configuration using structlog.

Usage:
    from client_ip.logging import get_logger

    logger = get_logger(__name__)
    logger.debug("client_ip_header_malformed", header="x-forwarded-for", reason="invalid_literal")

Header values are attacker-controlled and are never included in log events;
events carry the header name and a short machine-readable reason instead.
"""

import logging
import sys

import structlog
from structlog.types import Processor

from client_ip.config import get_settings


def configure_logging(json_format: bool | None = None, log_level: str | None = None) -> None:
    """
    Configure structlog output for the host application.

    Uses stdlib integration so that events from this package and from
    third-party libraries go through the same handler and renderer.

    Only applications should call this, once at startup: it replaces every
    handler on the root logger. Library code should just use ``get_logger``
    and leave the output setup to its host.

    Args:
        json_format: If True, output JSON (production). If False, pretty console output (development).
            Defaults to the LOG_JSON setting.
        log_level: Minimum log level to output. Defaults to the LOG_LEVEL setting.
    """
    settings = get_settings()
    if json_format is None:
        json_format = settings.LOG_JSON
    if log_level is None:
        log_level = settings.LOG_LEVEL

    log_level_int = getattr(logging, log_level.upper(), logging.INFO)

    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        renderer: Processor = structlog.processors.JSONRenderer()
        pre_chain.append(structlog.processors.format_exc_info)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level_int)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name, typically __name__ of the calling module.

    Returns:
        A bound structlog logger.
    """
    return structlog.get_logger(name)
