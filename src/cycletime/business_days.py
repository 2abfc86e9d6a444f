"""Business-day interval arithmetic."""

from __future__ import annotations

from datetime import datetime

import numpy as np


def business_days_between(later: datetime, earlier: datetime) -> int:
    """Return the signed number of business days between two timestamps.

    Counts Monday-Friday calendar days from ``earlier`` (inclusive) up to
    ``later`` (exclusive). Only the calendar date of each timestamp matters.
    When ``later`` precedes ``earlier`` the same half-open range is counted
    the other way round and negated, so
    ``business_days_between(a, b) == -business_days_between(b, a)``.

    Holiday calendars are not considered.
    """
    begin = np.datetime64(earlier.date(), "D")
    end = np.datetime64(later.date(), "D")

    # busday_count counts (end, begin] for a reversed range
    if end < begin:
        return -int(np.busday_count(end, begin))
    return int(np.busday_count(begin, end))
