"""Logging utilities for the ftptube application."""
import logging
import sys

from ftptube.core.config import Settings
from ftptube.core.request_context import get_request_id

LOGGER_NAME = "ftptube"


def configure_logging(settings: Settings, *, logger_name: str = LOGGER_NAME) -> logging.Logger:
    """Configure the root logger and return the application logger.

    Every record gets a ``request_id`` attribute so the format string can
    correlate lines from the same HTTP request. Records emitted outside a
    request are tagged ``system``.

    Args:
        settings: Application settings containing log-level information.
        logger_name: Name of the logger to retrieve.

    Returns:
        Configured logger instance.
    """

    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=(
            "%(asctime)s - %(name)s - %(levelname)s - "
            "[%(filename)s:%(lineno)d] - request_id=%(request_id)s - %(message)s"
        ),
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )

    old_factory = logging.getLogRecordFactory()
    if not getattr(old_factory, "_ftptube_request_id", False):

        def record_factory(*args, **kwargs) -> logging.LogRecord:
            record = old_factory(*args, **kwargs)
            record.request_id = get_request_id() or "system"
            return record

        record_factory._ftptube_request_id = True  # type: ignore[attr-defined]
        logging.setLogRecordFactory(record_factory)

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)

    # python-multipart logs every parsed part at DEBUG
    logging.getLogger("python_multipart").setLevel(max(log_level, logging.INFO))

    logger.debug("Logging configured with level %s", logging.getLevelName(log_level))
    return logger
