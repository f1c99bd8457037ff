import logging
import sys
from typing import Optional

import structlog


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def configure_logging(settings_obj: Optional[object] = None) -> None:
    """Configure structured logging from AIIGNORE_LOG_LEVEL / AIIGNORE_LOG_JSON."""
    if settings_obj is None:
        from aiignore.core.settings import settings as settings_obj

    log_level = str(getattr(settings_obj, "LOG_LEVEL", "INFO") or "INFO").upper()
    json_logs = bool(getattr(settings_obj, "LOG_JSON", True))
    if getattr(settings_obj, "DEBUG_LOG", False):
        log_level = "DEBUG"

    # Configure standard logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level, logging.INFO),
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
