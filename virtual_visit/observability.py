"""
Structured logging setup.

Decoding itself is pure; logging is the only observable effect and callers
choose where it goes by configuring the stdlib root logger.
"""

import logging

import structlog
from structlog.types import Processor

from virtual_visit.config import LoggingConfig, get_config


def _configure_structlog(config: LoggingConfig, cache_loggers: bool) -> None:
    renderer: Processor
    if config.format == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=cache_loggers,
    )


def configure_logging(config: LoggingConfig | None = None) -> None:
    """Configure structlog with JSON output in production and readable output locally."""
    config = config or LoggingConfig()
    _configure_structlog(config, cache_loggers=True)
    logging.basicConfig(format="%(message)s", level=getattr(logging, config.level))


def ensure_logging_configured() -> None:
    """
    Route structlog through stdlib logging unless the host already configured it.

    Events then obey stdlib levels, so debug output stays silent until the host
    enables it. No handler is installed and loggers are left uncached so a
    later configure_logging() still takes effect.
    """
    if structlog.is_configured():
        return
    _configure_structlog(get_config().logging, cache_loggers=False)
