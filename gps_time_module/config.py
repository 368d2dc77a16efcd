"""Configuration module for the GPS time conversion pipeline.

This module provides global configuration settings and automatic logging setup
using loguru. Importing it configures a console sink; file logging with
rotation is added on demand by :func:`gps_time_module.utils.logger.setup_logger`.

Module Attributes:
    PROJECT_ROOT (Path): Root directory of the project
    LOGS_DIR (Path): Default directory for log files
    LOG_LEVEL (str): Console log level, read from ``GPS_TIME_LOG_LEVEL``
    logger: Configured loguru logger instance

Example:
    >>> from gps_time_module.config import logger
    >>> logger.info("Converting timestamps...")
"""

import os
import sys
from pathlib import Path

from loguru import logger

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
LOGS_DIR = PROJECT_ROOT / "logs"

LOG_LEVEL = os.environ.get("GPS_TIME_LOG_LEVEL", "INFO").upper()

# Remove default handler (if it exists)
try:
    logger.remove(0)
except ValueError:
    pass  # Handler 0 already removed by the host application

logger.add(
    sys.stderr,
    format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
    level=LOG_LEVEL,
    colorize=True,
)
