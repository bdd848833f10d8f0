"""Time-weighted return over a benchmark timeline.

The timeline is cut into sub-periods at every date on which trades settle.
Each sub-period's return is measured on a holding set that did not change
inside it: the running period is closed with the pre-trade holdings, the
trades are applied, and the next period opens on the post-trade value. The
chained product of those returns is independent of the size and sign of the
cash flows.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import List, Mapping, Optional, Sequence, Tuple

from .models import HoldingSnapshot, Trade
from .prices import PriceBook, ValuationStatus, value_holdings
from .replay import apply_trades

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TwrState:
    """Accumulator threaded through the timeline walk."""

    holdings: HoldingSnapshot = field(default_factory=dict)
    sub_period_start_value: Optional[float] = None
    cumulative: float = 1.0

    def growth(self, value: float) -> float:
        """Cumulative growth factor if the open sub-period ended at ``value``."""

        baseline = self.sub_period_start_value
        if baseline is None or baseline <= 0:
            return self.cumulative
        return self.cumulative * (value / baseline)


@dataclass(frozen=True)
class PortfolioPoint:
    date: date
    value: float
    change_percent: float


def _to_percent(growth: float) -> float:
    return (growth - 1.0) * 100.0


def step(
    state: TwrState,
    day: date,
    due: Sequence[Trade],
    book: PriceBook,
) -> Tuple[TwrState, Optional[PortfolioPoint]]:
    """Advance the walk by one timeline date."""

    if not due:
        valuation = value_holdings(state.holdings, book, day)
        if not valuation.priced:
            logger.debug("Skipping %s: %s %s", day, valuation.status.value, valuation.missing_symbol or "")
            return state, None
        if state.sub_period_start_value is None:
            state = replace(state, sub_period_start_value=valuation.value)
        point = PortfolioPoint(day, valuation.value, _to_percent(state.growth(valuation.value)))
        return state, point

    cumulative = state.cumulative
    pre = value_holdings(state.holdings, book, day)
    baseline = state.sub_period_start_value
    if pre.priced and baseline is not None and baseline > 0:
        cumulative *= pre.value / baseline
    elif pre.status is ValuationStatus.MISSING_PRICE:
        logger.debug("Sub-period ending %s could not be closed: no close for %s", day, pre.missing_symbol)

    holdings = apply_trades(state.holdings, due)
    post = value_holdings(holdings, book, day)
    if not post.priced:
        logger.debug("No post-trade valuation on %s: %s", day, post.status.value)
        return TwrState(holdings, baseline, cumulative), None

    next_state = TwrState(holdings, post.value, cumulative)
    return next_state, PortfolioPoint(day, post.value, _to_percent(cumulative))


def compute_twr(
    dates: Sequence[date],
    snapshot: Mapping[str, float],
    trades: Sequence[Trade],
    book: PriceBook,
) -> List[PortfolioPoint]:
    """Walk ``dates`` in order, batching ``trades`` onto the first date at or after them.

    ``snapshot`` holds the shares open before the first date and ``trades``
    must be sorted by date.
    """

    state = TwrState(holdings=dict(snapshot))
    cursor = 0
    points: List[PortfolioPoint] = []
    for day in sorted(dates):
        due: List[Trade] = []
        while cursor < len(trades) and trades[cursor].date <= day:
            due.append(trades[cursor])
            cursor += 1
        state, point = step(state, day, due, book)
        if point is not None:
            points.append(point)
    return points


__all__ = ["TwrState", "PortfolioPoint", "step", "compute_twr"]
