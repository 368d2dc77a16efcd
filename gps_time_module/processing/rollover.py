"""
Week rollover correction for GPS Week Seconds sequences.

Week seconds reset to zero every Sunday 00:00 UTC. ``unwrap`` removes those
resets so the sequence keeps increasing across week boundaries; ``wrap`` puts
them back so every value lies below one week.

Both functions are a single forward pass carrying a running week correction,
equivalent to repeatedly fixing the first offending element and rescanning.
The work is vectorised with numpy and the sequence is modified in place.
"""

import numpy as np

from .epoch_calendar import SECONDS_PER_WEEK


def unwrap(times: np.ndarray, period: float = SECONDS_PER_WEEK) -> int:
    """
    Remove periodic resets from a week seconds sequence, in place.

    At every index ``k`` where the value drops below its predecessor, one week
    is added to that element and every following one, as many times as needed
    for the drop to disappear. Values within one week segment are expected to
    be non-decreasing already; out-of-order timestamps unrelated to a week
    reset are not detected and will be shifted like a reset.

    Args:
        times: 1-D float array of week seconds, modified in place
        period: Reset period in seconds (default: one week)

    Returns:
        Number of weeks added in total

    Example:
        >>> t = np.array([604790.0, 604799.0, 3.0, 12.0])
        >>> unwrap(t)
        1
        >>> t
        array([604790., 604799., 604803., 604812.])
    """
    if times.size < 2:
        return 0

    deltas = np.diff(times)
    # weeks needed to lift each decrease back to zero or above
    weeks = np.where(deltas < 0, np.ceil(-deltas / period), 0.0)
    if not weeks.any():
        return 0

    offsets = np.empty_like(times)
    offsets[0] = 0.0
    np.cumsum(weeks, out=offsets[1:])
    times += offsets * period

    return int(weeks.sum())


def wrap(times: np.ndarray, period: float = SECONDS_PER_WEEK) -> int:
    """
    Reinstate periodic resets in a week seconds sequence, in place.

    Whenever a value is at or above one week, one week is subtracted from it
    and from every following element, until no such value remains. A batch
    that is not ordered in time can therefore produce negative values after
    the first reset. Missing values (NaN) stay NaN and do not move the
    running week count.

    Args:
        times: 1-D float array of week seconds, modified in place
        period: Reset period in seconds (default: one week)

    Returns:
        Number of weeks subtracted from the last element

    Example:
        >>> t = np.array([604795.0, 604800.0, 604805.0])
        >>> wrap(t)
        1
        >>> t
        array([604795.,      0.,      5.])
    """
    if times.size == 0:
        return 0

    # running maximum of whole weeks reached so far; fmax skips NaN
    with np.errstate(invalid="ignore"):
        weeks = np.fmax.accumulate(np.fmax(np.floor_divide(times, period), 0.0))
    total = int(weeks[-1])
    if total == 0:
        return 0

    times -= weeks * period
    return total
