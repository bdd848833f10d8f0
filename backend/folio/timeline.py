"""Fetch planning and the benchmark-driven timeline."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Sequence

from .models import HoldingSnapshot, PricePoint, Trade, sort_trades
from .periods import Period, period_start, timeline_limit
from .replay import replay_holdings, split_trades


@dataclass(frozen=True)
class FetchPlan:
    """Everything needed to request prices and seed the TWR walk."""

    period: Period
    start: date
    end: date
    benchmark_symbol: str
    snapshot: HoldingSnapshot = field(default_factory=dict)
    trades: List[Trade] = field(default_factory=list)
    in_period: List[Trade] = field(default_factory=list)
    symbols: List[str] = field(default_factory=list)

    @property
    def fetch_symbols(self) -> List[str]:
        return [*self.symbols, self.benchmark_symbol]

    @property
    def has_symbols(self) -> bool:
        return bool(self.symbols)


def held_symbols(snapshot: HoldingSnapshot, in_period: Iterable[Trade]) -> List[str]:
    """Symbols open at the period start plus every symbol traded during it."""

    symbols = {symbol for symbol, shares in snapshot.items() if shares > 0}
    symbols.update(trade.symbol for trade in in_period)
    return sorted(symbols)


def plan_fetch(
    trades: Iterable[Trade],
    period: Period,
    today: date,
    benchmark_symbol: str,
) -> FetchPlan:
    ordered = sort_trades(trades)
    start = period_start(period, today)
    before, in_period = split_trades(ordered, start)
    snapshot = replay_holdings(before, start)
    return FetchPlan(
        period=period,
        start=start,
        end=today,
        benchmark_symbol=benchmark_symbol,
        snapshot=snapshot,
        trades=ordered,
        in_period=in_period,
        symbols=held_symbols(snapshot, in_period),
    )


def reference_dates(benchmark_series: Sequence[PricePoint], period: Period) -> List[date]:
    """Benchmark trading dates used as the canonical timeline.

    Short periods keep only the trailing dates so a coarser benchmark series
    does not leak history the caller did not ask for.
    """

    dates = sorted({point.date for point in benchmark_series})
    limit = timeline_limit(period)
    if limit is not None and len(dates) > limit:
        dates = dates[-limit:]
    return dates


__all__ = ["FetchPlan", "held_symbols", "plan_fetch", "reference_dates"]
