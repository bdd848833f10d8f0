"""Domain models used by the performance engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, Iterable, List, Optional


class TradeType(str, Enum):
    BUY = "buy"
    SELL = "sell"


class EventType(str, Enum):
    BUY = "buy"
    SELL = "sell"
    DIVIDEND = "dividend"


@dataclass(frozen=True)
class Trade:
    """A buy or sell of a single symbol, as recorded by the ledger."""

    date: date
    symbol: str
    type: TradeType
    shares: float
    price: float

    def signed_shares(self) -> float:
        """Return the share delta this trade applies to a holding."""

        return self.shares if self.type is TradeType.BUY else -self.shares


@dataclass(frozen=True)
class Dividend:
    """A dividend received on its ex-date."""

    ex_date: date
    symbol: str
    net_amount: float


@dataclass(frozen=True)
class PricePoint:
    """Daily close for a symbol or the benchmark."""

    date: date
    close: float


@dataclass(frozen=True)
class Event:
    """Informational marker attached to the timeline."""

    date: date
    type: EventType
    symbol: str
    shares: Optional[float] = None
    price: Optional[float] = None
    amount: Optional[float] = None


@dataclass(frozen=True)
class TimelinePoint:
    """One admissible date of the rendered performance curve."""

    date: date
    portfolio_value: float
    change_percent: float
    benchmark_value: float
    benchmark_change_percent: float
    events: List[Event] = field(default_factory=list)


@dataclass(frozen=True)
class PerformanceResult:
    """Portfolio curve, benchmark curve and events for one request."""

    points: List[TimelinePoint] = field(default_factory=list)
    events: List[Event] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.points

    @classmethod
    def empty(cls) -> "PerformanceResult":
        return cls(points=[], events=[])


HoldingSnapshot = Dict[str, float]


def sort_trades(trades: Iterable[Trade]) -> List[Trade]:
    """Return trades ordered by date; same-day trades keep ledger order."""

    return sorted(trades, key=lambda trade: trade.date)


__all__ = [
    "TradeType",
    "EventType",
    "Trade",
    "Dividend",
    "PricePoint",
    "Event",
    "TimelinePoint",
    "PerformanceResult",
    "HoldingSnapshot",
    "sort_trades",
]
