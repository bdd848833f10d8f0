"""Price lookups and holdings valuation.

Lookups return explicit results rather than ``None``. A date on which a held
symbol has no close is dropped by the engine; prices are never interpolated
or carried forward.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, Iterable, Mapping, Optional

from .models import PricePoint


@dataclass(frozen=True)
class PriceQuote:
    symbol: str
    date: date
    close: Optional[float]

    @property
    def available(self) -> bool:
        return self.close is not None


class ValuationStatus(str, Enum):
    PRICED = "priced"
    MISSING_PRICE = "missing_price"
    NO_HOLDINGS = "no_holdings"


@dataclass(frozen=True)
class Valuation:
    status: ValuationStatus
    value: float = 0.0
    missing_symbol: Optional[str] = None

    @property
    def priced(self) -> bool:
        return self.status is ValuationStatus.PRICED


class PriceBook:
    """Daily closes keyed by symbol and date."""

    def __init__(self, series: Mapping[str, Iterable[PricePoint]]):
        self._closes: Dict[str, Dict[date, float]] = {}
        for symbol, points in series.items():
            closes: Dict[date, float] = {}
            for point in points:
                closes[point.date] = float(point.close)
            self._closes[symbol] = closes

    def close(self, symbol: str, day: date) -> PriceQuote:
        return PriceQuote(symbol=symbol, date=day, close=self._closes.get(symbol, {}).get(day))


def value_holdings(holdings: Mapping[str, float], book: PriceBook, day: date) -> Valuation:
    """Mark ``holdings`` to market at ``day``'s closes."""

    total = 0.0
    held_any = False
    for symbol in sorted(holdings):
        shares = holdings[symbol]
        if shares <= 0:
            continue
        held_any = True
        quote = book.close(symbol, day)
        if not quote.available:
            return Valuation(status=ValuationStatus.MISSING_PRICE, missing_symbol=symbol)
        total += shares * quote.close  # type: ignore[operator]
    if not held_any:
        return Valuation(status=ValuationStatus.NO_HOLDINGS)
    return Valuation(status=ValuationStatus.PRICED, value=total)


__all__ = ["PriceQuote", "ValuationStatus", "Valuation", "PriceBook", "value_holdings"]
