import logging
import os
import sys
from typing import Optional

DEFAULT_LOG_LEVEL = "ERROR"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(threadName)s] - %(message)s"


def setup_logging(
    component_name: str = "stdin2file",
    log_level: Optional[str] = None,
) -> logging.Logger:
    """
    Set up logging configuration for a component.

    Library modules log through logging.getLogger(__name__), so configuring the
    package logger covers all of them.

    Args:
        component_name: Name of the logger to configure (the package name by default)
        log_level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL env var or ERROR

    Returns:
        Configured logger instance
    """
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)

    level = getattr(logging, log_level.upper(), logging.ERROR)

    logger = logging.getLogger(component_name)
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
            if isinstance(handler, logging.StreamHandler):
                handler.setStream(sys.stderr)
        return logger

    # stdout is left alone; diagnostics go to the error stream
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))

    logger.addHandler(handler)
    logger.propagate = False

    return logger
