"""Time-weighted portfolio performance engine."""

from .models import (
    Dividend,
    Event,
    EventType,
    PerformanceResult,
    PricePoint,
    TimelinePoint,
    Trade,
    TradeType,
)
from .periods import DEFAULT_PERIOD, Period
from .pipeline import build_performance, plan_fetch

__all__ = [
    "Dividend",
    "Event",
    "EventType",
    "PerformanceResult",
    "PricePoint",
    "TimelinePoint",
    "Trade",
    "TradeType",
    "Period",
    "DEFAULT_PERIOD",
    "plan_fetch",
    "build_performance",
]
