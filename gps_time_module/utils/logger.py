"""
Logging helpers built on loguru.

Adds a rotating DEBUG file sink for a conversion run next to the console
sink configured in :mod:`gps_time_module.config`, and the report lines the
pipeline writes for its stages, point files, conversion request and
timestamp ranges.
"""

from datetime import datetime
from pathlib import Path

import numpy as np
from loguru import logger

from ..config import LOGS_DIR

STAGE_COUNT = 3

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}"

_file_sink_id: int | None = None


def close_run_log() -> None:
    """Detach the file sink added by :func:`setup_logger`, if any."""
    global _file_sink_id

    if _file_sink_id is None:
        return
    try:
        logger.remove(_file_sink_id)
    except ValueError:
        pass  # already removed by the host application
    _file_sink_id = None


def setup_logger(log_dir: str | Path = LOGS_DIR, log_name: str | None = None) -> Path:
    """
    Send DEBUG output of a conversion run to a rotating, zipped log file.

    The console sink stays as configured at import; a file sink added by an
    earlier call is replaced, so repeated runs in one process never log twice.

    Args:
        log_dir: Directory to store log files (default: LOGS_DIR)
        log_name: Name for the log file (default: gpstime_<timestamp>.log)

    Returns:
        Path of the log file
    """
    global _file_sink_id

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / (log_name or f"gpstime_{datetime.now():%Y%m%d_%H%M%S}.log")

    close_run_log()

    _file_sink_id = logger.add(
        log_file,
        format=FILE_FORMAT,
        level="DEBUG",
        rotation="100 MB",
        retention="30 days",
        compression="zip",
        encoding="utf-8",
    )

    logger.info(f"Run log: {log_file}")
    return log_file


def log_stage(number: int, name: str) -> None:
    """Announce stage ``number`` of the load / convert / export sequence."""
    logger.info(f"[{number}/{STAGE_COUNT}] {name}")


def log_point_file(path: str | Path, role: str) -> None:
    """
    Log a point file with its format suffix and size, or warn if it is missing.

    Args:
        path: Input or output point file
        role: Short label such as "Input points" or "Output (csv)"
    """
    path = Path(path)
    if not path.is_file():
        logger.warning(f"{role}: {path} not found")
        return

    size_kib = path.stat().st_size / 1024
    logger.info(f"{role}: {path} [{path.suffix.lstrip('.') or '?'}, {size_kib:,.1f} KiB]")


def log_conversion_request(request, time_field: str) -> None:
    """Log the options that take effect for a validated conversion request."""
    mode = request.mode
    details = [f"field '{time_field}'"]
    if mode.reads_week_seconds:
        details.append(f"week of {request.start_date.isoformat()}")
        details.append("wrapped input" if request.input_is_wrapped else "continuous input")
    elif mode.writes_week_seconds:
        details.append("wrapped output" if request.wrap_output else "continuous output")

    logger.info(f"Conversion {mode.value}: {', '.join(details)}")


def log_time_range(times: np.ndarray, label: str) -> None:
    """Log count, span and missing values of a timestamp array at DEBUG level."""
    missing = int(np.isnan(times).sum())
    if missing == times.size:
        logger.debug(f"{label}: {times.size:,} timestamps, none present")
        return

    logger.debug(
        f"{label}: {times.size - missing:,} timestamps "
        f"in [{np.nanmin(times):.3f}, {np.nanmax(times):.3f}], {missing:,} missing"
    )


__all__ = ["logger", "setup_logger", "close_run_log", "log_stage", "log_point_file", "log_conversion_request", "log_time_range"]
