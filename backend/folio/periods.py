"""Reporting periods and their lookback windows."""
from __future__ import annotations

from datetime import date, timedelta
from enum import Enum
from typing import Callable, Dict, Optional

import pandas as pd


class Period(str, Enum):
    ONE_DAY = "1d"
    ONE_WEEK = "1w"
    THREE_MONTHS = "3m"
    SIX_MONTHS = "6m"
    ONE_YEAR = "1y"
    YEAR_TO_DATE = "ytd"


DEFAULT_PERIOD = Period.ONE_YEAR


def _months_back(months: int) -> Callable[[date], date]:
    def start(today: date) -> date:
        return (pd.Timestamp(today) - pd.DateOffset(months=months)).date()

    return start


# Short periods over-fetch calendar days; the timeline is trimmed to trading
# days afterwards.
_LOOKBACK: Dict[Period, Callable[[date], date]] = {
    Period.ONE_DAY: lambda today: today - timedelta(days=5),
    Period.ONE_WEEK: lambda today: today - timedelta(days=10),
    Period.THREE_MONTHS: _months_back(3),
    Period.SIX_MONTHS: _months_back(6),
    Period.ONE_YEAR: _months_back(12),
    Period.YEAR_TO_DATE: lambda today: date(today.year, 1, 1),
}

_TIMELINE_LIMIT: Dict[Period, Optional[int]] = {
    Period.ONE_DAY: 2,
    Period.ONE_WEEK: 7,
    Period.THREE_MONTHS: None,
    Period.SIX_MONTHS: None,
    Period.ONE_YEAR: None,
    Period.YEAR_TO_DATE: None,
}

_missing = (set(Period) - set(_LOOKBACK)) | (set(Period) - set(_TIMELINE_LIMIT))
if _missing:
    raise RuntimeError(f"Periods without a lookback rule: {sorted(p.value for p in _missing)}")


def period_start(period: Period, today: date) -> date:
    """Return the first calendar date covered by ``period`` ending ``today``."""

    return _LOOKBACK[period](today)


def timeline_limit(period: Period) -> Optional[int]:
    """Maximum number of trailing benchmark dates shown for ``period``."""

    return _TIMELINE_LIMIT[period]


__all__ = ["Period", "DEFAULT_PERIOD", "period_start", "timeline_limit"]
