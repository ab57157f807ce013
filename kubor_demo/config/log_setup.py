"""Process-wide logging configuration for the service and the embedded server."""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
UVICORN_LOGGER_NAMES = ("uvicorn", "uvicorn.error", "uvicorn.access")


def config_configure_logging(log_level: str) -> None:
    """Install a single stderr handler on the root logger.

    uvicorn loggers are reset to propagate into the root handler so server
    and lifecycle messages share one stream and one format.

    Args:
        log_level: Logging threshold name such as `INFO` or `DEBUG`.

    Returns:
        None: Logging is configured as a side effect.
    """

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    for logger_name in UVICORN_LOGGER_NAMES:
        uvicorn_logger = logging.getLogger(logger_name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True
