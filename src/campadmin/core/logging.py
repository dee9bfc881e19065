"""Logging configuration"""

import logging
import sys
from typing import Optional


def setup_logger(service_name: str, level: Optional[str] = "INFO") -> logging.Logger:
    """Configure the service logger.

    Module loggers are created with ``logging.getLogger(__name__)`` under the
    ``campadmin`` package, so the handler is attached to the package logger as
    well as the named service logger.
    """
    log_level = getattr(logging, level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    handler.setFormatter(formatter)

    for name in {service_name, "campadmin"}:
        logger = logging.getLogger(name)
        logger.setLevel(log_level)
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.propagate = False

    return logging.getLogger(service_name)
