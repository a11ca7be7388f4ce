"""Logging setup for the service and the CLI."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import TextIO

from pubdict.config import Settings, settings as default_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_DETAILED = (
    "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
)

# httpx logs every request at INFO; backend URLs are logged by the transport instead
HTTP_CLIENT_LOGGERS = ("httpx", "httpcore")
REQUEST_LOGGER = "pubdict.services.dictionary.transport"


def _file_handler(settings: Settings) -> RotatingFileHandler:
    log_path = settings.resolved_log_file_path
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=log_path,
        maxBytes=settings.log_file_max_bytes,
        backupCount=settings.log_file_backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT_DETAILED))
    return handler


def configure_request_logging(settings: Settings) -> None:
    """
    Route backend request logging.

    With ``log_requests`` every backend URL is logged at DEBUG whatever the
    root level is. The HTTP client's own loggers stay at WARNING either way.
    """
    for name in HTTP_CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger(REQUEST_LOGGER).setLevel(
        logging.DEBUG if settings.log_requests else logging.NOTSET
    )


def setup_logging(settings: Settings | None = None, stream: TextIO | None = None) -> None:
    """Configure the root logger from settings.

    Logs go to ``stream`` (stdout by default) and, if enabled, to a rotating
    file. Calling this again replaces the handlers it installed before.
    """
    settings = settings or default_settings
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.log_level))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(console_handler)

    if settings.log_file_enabled:
        root_logger.addHandler(_file_handler(settings))

    configure_request_logging(settings)
