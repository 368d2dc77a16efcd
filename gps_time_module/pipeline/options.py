"""Validation of raw ``filters.gpstimeconvert`` options.

Options arrive as strings from a YAML file, the command line or a calling
application and are turned into an immutable
:class:`~gps_time_module.processing.transforms.ConversionRequest`. Options that
do not apply to the selected conversion are ignored and never validated.

Options:
    conversion: One of ws2gst, ws2gt, gst2ws, gt2ws, gst2gt, gt2gst
        (case-insensitive)
    start_date: GMT start date of data collect, YYYY-MM-DD (ws2gst, ws2gt)
    wrap: Reset output week seconds to zero on Sundays, true/false
        (gst2ws, gt2ws)
    wrapped: Input week seconds reset to zero on Sundays, true/false
        (ws2gst, ws2gt)
"""

import re
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..config import logger
from ..errors import (
    ERR_MSG_INVALID_DATE,
    ERR_MSG_INVALID_MODE,
    ERR_MSG_MISSING_START_DATE,
    InvalidDateError,
    InvalidFlagError,
    InvalidModeError,
    MissingStartDateError,
)
from ..processing.transforms import ConversionMode, ConversionRequest

OPTION_NAMES = ("conversion", "start_date", "wrap", "wrapped")

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_mode(value: Any) -> ConversionMode:
    """Match a conversion type case-insensitively to one of the six modes."""
    if value is None:
        raise InvalidModeError(ERR_MSG_INVALID_MODE, "'conversion' option is missing")
    try:
        return ConversionMode(str(value).strip().lower())
    except ValueError:
        raise InvalidModeError(ERR_MSG_INVALID_MODE, f"Unknown conversion type: {value!r}") from None


def parse_start_date(value: Any) -> date:
    """Parse a literal YYYY-MM-DD start date (interpreted as UTC midnight)."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MissingStartDateError(ERR_MSG_MISSING_START_DATE)

    # YAML turns unquoted dates into date objects
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not _DATE_PATTERN.match(text):
        raise InvalidDateError(ERR_MSG_INVALID_DATE, f"Got start_date={value!r}")
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError as e:
        raise InvalidDateError(ERR_MSG_INVALID_DATE, f"Not a calendar date: {text} ({e})") from e


def parse_flag(name: str, value: Any) -> bool:
    """Accept 'true' or 'false' in any letter case; bools pass through their string form."""
    text = str(value).strip()
    if text.lower() == "true":
        return True
    if text.lower() == "false":
        return False
    raise InvalidFlagError(f"{name} option must be either 'true' or 'false'.", f"Got {name}={value!r}")


def validate_options(conversion: Any,
                     start_date: Optional[Any] = None,
                     wrap: Any = "false",
                     wrapped: Any = "false") -> ConversionRequest:
    """Validate raw option values into a conversion request.

    Args:
        conversion: Conversion type string
        start_date: YYYY-MM-DD start date, required for ws2gst and ws2gt
        wrap: 'true'/'false', used for gst2ws and gt2ws
        wrapped: 'true'/'false', used for ws2gst and ws2gt

    Returns:
        Immutable ConversionRequest

    Raises:
        InvalidModeError: Unknown conversion type
        MissingStartDateError: start_date absent for a week seconds input mode
        InvalidDateError: start_date not a YYYY-MM-DD calendar date
        InvalidFlagError: wrap/wrapped not 'true' or 'false'
    """
    mode = parse_mode(conversion)

    valid_date = None
    valid_wrap = False
    valid_wrapped = False

    if mode.reads_week_seconds:
        valid_date = parse_start_date(start_date)
        valid_wrapped = parse_flag("wrapped", wrapped)
    elif mode.writes_week_seconds:
        valid_wrap = parse_flag("wrap", wrap)

    request = ConversionRequest(
        mode=mode,
        start_date=valid_date,
        wrap_output=valid_wrap,
        input_is_wrapped=valid_wrapped,
    )
    logger.debug(f"Validated conversion options: {request}")
    return request


def validate_option_mapping(options: Mapping[str, Any]) -> ConversionRequest:
    """Validate an option dictionary (YAML section, CLI arguments).

    Missing keys take their defaults; a missing 'conversion' is an invalid mode.
    Keys other than the four known options are ignored with a warning.
    """
    unknown = set(options) - set(OPTION_NAMES)
    if unknown:
        logger.warning(f"Ignoring unknown conversion option(s): {', '.join(sorted(unknown))}")

    flags = {name: options[name] for name in ("wrap", "wrapped") if options.get(name) is not None}
    return validate_options(
        options.get("conversion"),
        start_date=options.get("start_date"),
        **flags,
    )
