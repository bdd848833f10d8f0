"""Pipeline functions for building the performance timeline."""
from __future__ import annotations

import logging
from typing import Iterable, List, Mapping, Sequence

from .benchmark import normalize_series
from .events import collect_events, group_events
from .models import Dividend, PerformanceResult, PricePoint, TimelinePoint
from .prices import PriceBook
from .timeline import FetchPlan, plan_fetch, reference_dates
from .twr import compute_twr

logger = logging.getLogger(__name__)


def build_performance(
    plan: FetchPlan,
    series_by_symbol: Mapping[str, Sequence[PricePoint]],
    dividends: Iterable[Dividend] = (),
) -> PerformanceResult:
    """Compute the portfolio and benchmark curves for an already fetched plan.

    ``series_by_symbol`` must contain the benchmark series under
    ``plan.benchmark_symbol``; symbols without a series are treated as never
    priced. The result is a pure function of the inputs.
    """

    if not plan.has_symbols:
        return PerformanceResult.empty()

    dates = reference_dates(series_by_symbol.get(plan.benchmark_symbol, []), plan.period)
    if not dates:
        logger.debug("Benchmark %s returned no prices", plan.benchmark_symbol)
        return PerformanceResult.empty()

    book = PriceBook(series_by_symbol)
    portfolio = compute_twr(dates, plan.snapshot, plan.in_period, book)
    if not portfolio:
        return PerformanceResult.empty()

    benchmark_values = []
    for point in portfolio:
        quote = book.close(plan.benchmark_symbol, point.date)
        benchmark_values.append((point.date, quote.close if quote.available else 0.0))
    benchmark = normalize_series(benchmark_values)

    events = collect_events(plan.trades, dividends, portfolio[0].date, portfolio[-1].date)
    events_by_date = group_events(events, [point.date for point in portfolio])

    points: List[TimelinePoint] = []
    for point, (_, bench_value, bench_change) in zip(portfolio, benchmark):
        points.append(
            TimelinePoint(
                date=point.date,
                portfolio_value=point.value,
                change_percent=point.change_percent,
                benchmark_value=bench_value,
                benchmark_change_percent=bench_change,
                events=events_by_date[point.date],
            )
        )
    logger.debug(
        "Built %d timeline points out of %d benchmark dates for %s",
        len(points),
        len(dates),
        plan.period.value,
    )
    return PerformanceResult(points=points, events=events)


__all__ = ["plan_fetch", "build_performance"]
