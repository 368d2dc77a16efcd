"""
GPS epoch calendar arithmetic.

Pure functions mapping GPS Time seconds to UTC calendar days and calendar
days to the GPS Time of the Sunday that starts their week. Leap seconds are
not modelled; all arithmetic is UTC and independent of the process time zone.
"""

from datetime import date, datetime, timedelta, timezone

from ..errors import PointBatchError

# GPS zero time: 1980-01-06 00:00:00 UTC (a Sunday)
GPS_EPOCH = datetime(1980, 1, 6, tzinfo=timezone.utc)
GPS_EPOCH_DATE = GPS_EPOCH.date()

SECONDS_PER_DAY = 86_400
SECONDS_PER_WEEK = 7 * SECONDS_PER_DAY

# GPS Standard Time = GPS Time - STANDARD_TIME_OFFSET
STANDARD_TIME_OFFSET = 1_000_000_000


def to_civil_date(gps_seconds: float) -> date:
    """
    Return the UTC calendar day containing a GPS Time instant.

    Only instants that fall inside the ``datetime`` range (years 1 to 9999,
    roughly -6.2e10 to 2.5e11 seconds around the epoch) have a calendar day.

    Args:
        gps_seconds: Seconds since the GPS epoch (may be negative or fractional)

    Returns:
        Calendar date of the instant, time of day discarded

    Raises:
        PointBatchError: If the instant is NaN, infinite or outside the
            calendar range

    Example:
        >>> to_civil_date(0.0)
        datetime.date(1980, 1, 6)
        >>> to_civil_date(-0.5)
        datetime.date(1980, 1, 5)
    """
    try:
        return (GPS_EPOCH + timedelta(seconds=float(gps_seconds))).date()
    except (OverflowError, ValueError) as e:
        raise PointBatchError(f"Timestamp out of range: {gps_seconds} GPS seconds", str(e)) from e


def days_since_sunday(day: date) -> int:
    """Number of days between the preceding (or same) Sunday and ``day``."""
    # isoweekday: Monday=1 ... Sunday=7
    return day.isoweekday() % 7


def week_start_date(day: date) -> date:
    """Return the Sunday that begins the week containing ``day``."""
    return day - timedelta(days=days_since_sunday(day))


def week_start_seconds(day: date) -> int:
    """
    Return GPS Time seconds of the Sunday 00:00 UTC starting ``day``'s week.

    Both endpoints are midnight-aligned, so the result is an exact integer.
    Crossing month or year boundaries is handled by date arithmetic, e.g.
    2021-01-02 belongs to the week starting Sunday 2020-12-27.

    Args:
        day: Reference calendar date (UTC)

    Returns:
        Signed seconds from the GPS epoch to the week start

    Example:
        >>> week_start_seconds(date(1980, 1, 6))
        0
        >>> week_start_seconds(date(1980, 1, 12))
        0
    """
    if isinstance(day, datetime):
        day = day.date()
    return (week_start_date(day) - GPS_EPOCH_DATE).days * SECONDS_PER_DAY
