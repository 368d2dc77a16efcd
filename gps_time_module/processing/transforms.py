"""
Time transformation between GPS Time, GPS Standard Time and GPS Week Seconds.

Defines the six conversion modes, the immutable conversion request and
:func:`apply`, which converts a whole timestamp sequence in place.

Representations:
    - GPS Time (gt): seconds since 1980-01-06 00:00:00 UTC
    - GPS Standard Time (gst): GPS Time minus 1e9 seconds
    - GPS Week Seconds (ws): seconds since the Sunday 00:00 UTC starting the
      week, either reset to zero every week (wrapped) or not
"""

from datetime import date
from enum import Enum
from typing import Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..config import logger
from ..errors import ERR_MSG_MISSING_START_DATE, MissingStartDateError
from .epoch_calendar import STANDARD_TIME_OFFSET, to_civil_date, week_start_seconds
from .rollover import unwrap, wrap


class ConversionMode(str, Enum):
    """Direction of a time conversion, named ``<source>2<target>``."""

    WS2GST = "ws2gst"
    WS2GT = "ws2gt"
    GST2WS = "gst2ws"
    GT2WS = "gt2ws"
    GST2GT = "gst2gt"
    GT2GST = "gt2gst"

    @property
    def reads_week_seconds(self) -> bool:
        return self in (ConversionMode.WS2GST, ConversionMode.WS2GT)

    @property
    def writes_week_seconds(self) -> bool:
        return self in (ConversionMode.GST2WS, ConversionMode.GT2WS)

    @property
    def uses_standard_time(self) -> bool:
        """True when the week seconds side is paired with GPS Standard Time."""
        return self in (ConversionMode.WS2GST, ConversionMode.GST2WS)


class ConversionRequest(BaseModel):
    """Validated, immutable description of one conversion.

    Attributes:
        mode: Conversion direction
        start_date: UTC date inside the first week of the data (week seconds
            input only)
        wrap_output: Reset output week seconds to zero on Sundays (week
            seconds output only)
        input_is_wrapped: Input week seconds reset to zero on Sundays and must
            be unwrapped first (week seconds input only)
    """
    model_config = ConfigDict(frozen=True)

    mode: ConversionMode
    start_date: Optional[date] = Field(None, description="GMT start date of data collect")
    wrap_output: bool = Field(False, description="Reset output week seconds to zero on Sundays")
    input_is_wrapped: bool = Field(False, description="Input week seconds reset to zero on Sundays")

    @model_validator(mode="after")
    def check_start_date(self) -> "ConversionRequest":
        """Week seconds input needs a start date to anchor the week."""
        if self.mode.reads_week_seconds and self.start_date is None:
            raise MissingStartDateError(ERR_MSG_MISSING_START_DATE)
        return self


def week_seconds_to_gps_time(times: np.ndarray, request: ConversionRequest) -> None:
    """Convert week seconds to GPS Time (ws2gt) or GPS Standard Time (ws2gst)."""
    if request.input_is_wrapped:
        weeks = unwrap(times)
        logger.debug(f"Unwrapped week seconds across {weeks} week reset(s)")

    # seconds from GPS zero to first day of week
    week_start = week_start_seconds(request.start_date)

    if request.mode.uses_standard_time:
        week_start -= STANDARD_TIME_OFFSET

    times += week_start


def gps_time_to_week_seconds(times: np.ndarray, request: ConversionRequest) -> None:
    """Convert GPS Time (gt2ws) or GPS Standard Time (gst2ws) to week seconds.

    The first timestamp decides which week the whole batch belongs to. Later
    timestamps in another week come out negative or above one week unless
    ``wrap_output`` is set. Missing (NaN) timestamps are skipped when picking
    the anchor and stay NaN.
    """
    if request.mode.uses_standard_time:
        times += STANDARD_TIME_OFFSET

    present = np.flatnonzero(~np.isnan(times))
    if present.size == 0:
        logger.warning("No timestamp present in the batch, week seconds left unset")
        return

    first_day = to_civil_date(times[present[0]])
    week_start = week_start_seconds(first_day)
    logger.debug(f"Anchoring week seconds to week of {first_day.isoformat()} (GPS {week_start} s)")

    times -= week_start

    if request.wrap_output:
        weeks = wrap(times)
        logger.debug(f"Wrapped week seconds across {weeks} week boundary(ies)")


def apply(times: np.ndarray, request: ConversionRequest) -> np.ndarray:
    """
    Convert a full timestamp sequence according to ``request``.

    A float64 array is modified in place; any other sequence is copied into a
    new float64 array first. Element order is never changed and an empty
    sequence is returned untouched.

    Args:
        times: Timestamps in the source representation
        request: Validated conversion request

    Returns:
        The converted float64 array

    Example:
        >>> request = ConversionRequest(mode=ConversionMode.GST2GT)
        >>> apply(np.array([300_000_000.0]), request)
        array([1.3e+09])
    """
    times = np.asarray(times, dtype=np.float64)
    if times.size == 0:
        logger.debug("Empty timestamp sequence, nothing to convert")
        return times

    mode = request.mode
    if mode.reads_week_seconds:
        week_seconds_to_gps_time(times, request)
    elif mode.writes_week_seconds:
        gps_time_to_week_seconds(times, request)
    elif mode is ConversionMode.GST2GT:
        times += STANDARD_TIME_OFFSET
    elif mode is ConversionMode.GT2GST:
        times -= STANDARD_TIME_OFFSET
    else:
        raise ValueError(f"Unhandled conversion mode: {mode}")

    return times
