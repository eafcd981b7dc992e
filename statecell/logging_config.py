"""
Structured logging configuration for statecell.

Provides JSON-formatted logs with a store_id field for correlating log lines
that belong to the same store.

Usage:
    from statecell.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, store_id="3f2a9c")
    logger.info("Reducer replaced")
"""

import logging
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

from .config import Settings, load_settings


def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure root logger with structured logging.

    Args:
        settings: Settings to apply (default: read from environment)
    """
    settings = settings or load_settings()
    level = getattr(logging, settings.log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.addFilter(StoreIdFilter())

    if settings.log_format == "json":
        formatter: logging.Formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(store_id)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [store_id=%(store_id)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_logger(name: str, store_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger with optional store_id for correlation.

    Args:
        name: Logger name (typically __name__)
        store_id: Identifier of the store the messages belong to

    Returns:
        LoggerAdapter with store_id in extra fields
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, {"store_id": store_id or "N/A"})


class StoreIdFilter(logging.Filter):
    """
    Logging filter that adds store_id to all log records.

    Ensures every record has a store_id field, even if not set via LoggerAdapter.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "store_id"):
            record.store_id = "N/A"  # type: ignore
        return True
