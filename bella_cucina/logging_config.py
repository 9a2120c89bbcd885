"""
Logging configuration for the Bella Cucina ordering API.

Every line carries the id of the HTTP request that produced it (the
X-Request-ID header, set by the request-id middleware in main.py), so all
the lines of one checkout can be pulled out of interleaved worker output.
Lines logged outside a request show "-".

Usage:
    from bella_cucina.logging_config import setup_logging
    setup_logging()  # Call once at application startup

Environment variables:
    LOG_LEVEL: Set to DEBUG, INFO, WARNING, ERROR, or CRITICAL (default: INFO)
"""
import logging
import os
import sys
from contextvars import ContextVar

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"

AUDIT_LOGGERS = ("bella_cucina.services.order", "bella_cucina.services.payment")

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    """Stamp each record with the current request id."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


def setup_logging(level: str = None) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If not provided, reads from LOG_LEVEL env var, defaults to INFO.
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    level = level.upper()

    valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if level not in valid_levels:
        level = "INFO"

    numeric_level = getattr(logging, level)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    # No-op when the root logger already has handlers (e.g. under uvicorn or pytest)
    logging.basicConfig(level=numeric_level, handlers=[handler])

    logging.getLogger("bella_cucina").setLevel(numeric_level)

    # Order and payment lines stay at INFO when the rest of the app is quieter
    audit_level = logging.INFO if numeric_level > logging.INFO else logging.NOTSET
    for name in AUDIT_LOGGERS:
        logging.getLogger(name).setLevel(audit_level)

    if level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.debug("Logging configured at %s level", level)
